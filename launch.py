"""mc-runner Launch Script.

Runs the launcher from a source checkout without installing it.

Usage:
    python launch.py
    python launch.py --min 2GiB --max 8GiB
    python launch.py --dir /srv/minecraft --web
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

if __name__ == "__main__":
    from mc_runner.cli import main

    sys.exit(main())
