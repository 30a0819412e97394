import sys
from pathlib import Path

# Put the project root on sys.path so `import analytics`, `import models`, etc. work without installing
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))
