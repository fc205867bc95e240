import sys
from pathlib import Path

# put src/ on the import path (checkout without pip install -e .)
sys.path.insert(0, str(Path(__file__).parent / "src"))

from ratings.ui.generator import main

if __name__ == "__main__":
    raise SystemExit(main())
