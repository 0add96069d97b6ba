from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from apps.wiring import build_catalog_controller
from docscan.adapters.capture.filesystem_capture_surface_adapter import FilesystemCaptureSurfaceAdapter



def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description='Scan page images into one stored PDF document')
    parser.add_argument('images', nargs='*', type=Path, help='Page images in scan order')
    return parser.parse_args()



def main() -> int:
    args = parse_args()
    controller = build_catalog_controller()
    report = controller.request_capture(FilesystemCaptureSurfaceAdapter(args.images))

    if report.alert_raised:
        print(f'ERROR: {controller.alert_message}')
        return 1

    if report.document is None:
        print(json.dumps({'capture_state': report.capture_state.value}, indent=2))
        return 0

    print(json.dumps({
        'capture_state': report.capture_state.value,
        'id': report.document.id,
        'name': report.document.name,
        'date_created': report.document.date_created.isoformat(),
        'page_count': controller.page_count(report.document.id),
    }, indent=2))
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
