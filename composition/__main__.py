"""Run the demonstrations as a Python module."""

import composition.main

if __name__ == "__main__":
    # The ``prog`` needs to be set in the argparse.
    # Otherwise the program name in the help shown to the user will be ``__main__``.
    composition.main.main()
