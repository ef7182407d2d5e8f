from curltui.tui import main

main()
