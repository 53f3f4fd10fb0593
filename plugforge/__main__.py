from plugforge.cli import main

main()
