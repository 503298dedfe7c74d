import sys

from service_control.cli import main

if __name__ == "__main__":
    sys.exit(main())
