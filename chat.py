import sys

from ghmodels.cli import main


if __name__ == "__main__":
    try:
        sys.exit(main())
    except Exception:
        import traceback

        print("CRITICAL ERROR CAUGHT:", file=sys.stderr)
        traceback.print_exc()
        sys.exit(1)
