"""Allow running the CLI with `python -m foldersort`."""

from foldersort import main

if __name__ == "__main__":
    main()
