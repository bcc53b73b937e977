"""Allow ``python -m rowsofb``."""

from rowsofb.cli import main

if __name__ == "__main__":
    main()
