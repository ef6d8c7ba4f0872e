"""
Hoops Dynasty - Main Entry Point
Runs the FastAPI backend
"""

import os
import subprocess
import sys


def main():
    os.chdir(os.path.dirname(os.path.abspath(__file__)))
    port = os.environ.get("PORT", "8000")

    api_proc = subprocess.Popen([
        sys.executable, "-m", "uvicorn", "api.main:app",
        "--host=0.0.0.0", f"--port={port}",
        "--log-level=info",
    ])

    try:
        api_proc.wait()
    except KeyboardInterrupt:
        pass
    finally:
        api_proc.terminate()


if __name__ == "__main__":
    main()
