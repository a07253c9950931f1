"""Allow ``python -m imgprobe``."""

from imgprobe.cli import main

if __name__ == "__main__":
    main()
