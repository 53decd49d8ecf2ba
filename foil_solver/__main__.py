# foil_solver/__main__.py
# Package entrypoint so you can run:
#   python -m foil_solver --help
# and it will delegate to the JSON runner by default.
#
# Examples:
#   python -m foil_solver --job pool.json
#   python -m foil_solver --job pool.json --objective minRolls --out out/

from __future__ import annotations

from .run_json import main

if __name__ == "__main__":
    main()
