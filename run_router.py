from __future__ import annotations
import sys
from typing import List, Optional
from dvrouter.config import parse_args
from dvrouter.router import Router

def main(argv: Optional[List[str]] = None) -> int:
    cfg = parse_args(argv)

    print(f"starting Router #{cfg.router_id} with parameters:")
    print(f"Relay server host name: {cfg.host}")
    print(f"Relay server port number: {cfg.port}")
    print(f"Routing update interval: {cfg.interval_ms} (milli-seconds)")

    # blocks until QUIT or a session error
    router = Router(cfg)
    table = router.start()
    if router.error is None: print("Router terminated normally")
    else: print(f"Router terminated with error: {router.error}")

    print()
    print(f"Routing Table at Router #{cfg.router_id}")
    print(table, end="")
    return 0 if router.error is None else 1

if __name__ == "__main__": sys.exit(main())
