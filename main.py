import sys

from wireview import main

if __name__ == "__main__":
    sys.exit(main())
