# plank_solver/__main__.py
# Package entrypoint so you can run:
#   python -m plank_solver --help
# and it will delegate to the JSON runner.
#
# Examples:
#   python -m plank_solver --job bookcase.json
#   python -m plank_solver --job bookcase.json --seed 42 --out out/ --png plan.png

from __future__ import annotations

from .run_json import main

if __name__ == "__main__":
    main()
