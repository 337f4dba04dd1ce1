import sys

from ghg_sunburst.cli.__main__ import main

if __name__ == "__main__":
    sys.exit(main())
