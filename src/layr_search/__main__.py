"""Allow ``python -m layr_search``."""

from layr_search.cli import main

if __name__ == "__main__":
    main()
