from label_sorter.cli import main

main()
