#!/usr/bin/env python3
import sys


def main() -> int:
    print("Running preflight import check...")
    try:
        import selami.main
        print("Import selami.main: OK")

        from selami.settings import settings
        from selami.core.deep_link import compose_launch_candidates
        for uri in compose_launch_candidates(settings.RECEIVER_IDENTIFIER, "1"):
            print(f"Launch candidate: {uri}")

        print("Preflight check passed.")
        return 0
    except Exception as e:
        print(f"Preflight check FAILED: {e}")
        import traceback
        traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
