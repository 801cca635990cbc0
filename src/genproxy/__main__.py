from __future__ import annotations

from genproxy.ui.cli import run

if __name__ == "__main__":
    run()
