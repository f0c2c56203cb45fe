from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

from fairdeck_backend.api.deps import deal_service


async def _run(path: Path) -> bool:
    record = json.loads(path.read_text())
    result = await deal_service.verify_audit_record(record)
    print(json.dumps(result.model_dump(mode="json"), indent=2))
    return result.valid


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Verify an exported audit record offline")
    parser.add_argument("audit_file", type=Path)
    args = parser.parse_args(argv)

    return 0 if asyncio.run(_run(args.audit_file)) else 1


if __name__ == "__main__":
    sys.exit(main())
