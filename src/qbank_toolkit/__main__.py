import sys

from qbank_toolkit.cli import main

if __name__ == "__main__":
    sys.exit(main())
