import sys

from streamBox.cli import app


# Python entry-point guard
if __name__ == "__main__":
    sys.exit(app())
