import os
import sys

# src/ doit être importable quand on lance "python src/main.py"
SRC = os.path.dirname(os.path.abspath(__file__))
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from service.daemon import main

# Main entry point
if __name__ == "__main__":
    sys.exit(main())
