#!/usr/bin/env python3
"""
Launch the consultation form in Streamlit
Lanzar el formulario de consulta en Streamlit
"""

import argparse
import subprocess
import sys
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from formtext.layout_loader import list_available_layouts

APP_PATH = PROJECT_ROOT / "ui" / "streamlit_app" / "app.py"


def build_command(port: int) -> list:
    """Streamlit command line / Linea de comandos de Streamlit"""
    return [
        sys.executable, "-m", "streamlit", "run",
        str(APP_PATH),
        "--server.headless=true",
        f"--server.port={port}",
    ]


def main():
    parser = argparse.ArgumentParser(description="Run the form text app")
    parser.add_argument("--port", type=int, default=8501, help="Port for the Streamlit server")
    args = parser.parse_args()

    layouts = list_available_layouts()
    if not layouts:
        print(f"No layouts found under {PROJECT_ROOT / 'config' / 'layouts'}")
        sys.exit(1)

    print(f"Layouts: {', '.join(layouts)}")
    print(f"Serving on port {args.port}")

    try:
        subprocess.run(build_command(args.port), check=True)
    except KeyboardInterrupt:
        print("\nStopped.")
    except subprocess.CalledProcessError as e:
        print(f"Streamlit exited with status {e.returncode}")
        sys.exit(1)


if __name__ == "__main__":
    main()
