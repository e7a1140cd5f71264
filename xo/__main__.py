from xo.cli import main

main()
