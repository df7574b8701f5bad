# Hidayah-CLI.py
import sys

if sys.version_info < (3, 9):
    print("Error: HidayahCLI requires Python 3.9 or higher.")
    sys.exit(1)

from hidayah.app import main

if __name__ == "__main__":
    main()
