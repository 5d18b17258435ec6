import sys

from terminaltask.cli import main

if __name__ == "__main__":
    sys.exit(main())
