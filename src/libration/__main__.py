import sys

from libration.app import main

if __name__ == "__main__":
    sys.exit(main())
