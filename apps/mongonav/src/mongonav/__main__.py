"""Entry point for running mongonav as a module.

This allows running: python -m mongonav
"""

from .cli import main

if __name__ == "__main__":
    # No try/except here: main() is the CLI boundary and already reports
    # failures and exits with the appropriate code.
    main()
