"""
Development launcher for Wireframe Projector.

Runs the app straight from a source checkout: `src` goes on `sys.path`, so
`wireframeprojector` imports without `pip install -e .`. An installed copy
starts with the `wireframeprojector` console script or
`python -m wireframeprojector` instead.

Usage:
    $ python run.py
"""
import sys
import os

current_dir: str = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, os.path.join(current_dir, 'src'))

# Windows groups taskbar buttons by this id; without it the window is shown
# under the python.exe icon.
try:
    import ctypes
    ctypes.windll.shell32.SetCurrentProcessExplicitAppUserModelID('WireframeProjector.App')
except (AttributeError, ImportError):
    pass

from wireframeprojector.app.main import main

if __name__ == "__main__":
    sys.exit(main())
