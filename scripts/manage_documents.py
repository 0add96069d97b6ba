from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from apps.wiring import build_catalog_controller



def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description='Browse and maintain stored scanned documents')
    sub = parser.add_subparsers(dest='command', required=True)

    sub.add_parser('list', help='List documents, newest first')

    rename = sub.add_parser('rename', help='Rename a document')
    rename.add_argument('doc_id')
    rename.add_argument('name')

    delete = sub.add_parser('delete', help='Delete a document')
    delete.add_argument('doc_id')

    export = sub.add_parser('export', help='Write a document PDF to disk')
    export.add_argument('doc_id')
    export.add_argument('--out-dir', type=Path, default=Path('.'))

    imp = sub.add_parser('import', help='Import an existing PDF file')
    imp.add_argument('pdf_path', type=Path)
    return parser.parse_args()



def main() -> int:
    args = parse_args()
    controller = build_catalog_controller()

    if args.command == 'list':
        rows = [
            {
                'id': doc.id,
                'name': doc.name,
                'date_created': doc.date_created.isoformat(),
                'page_count': controller.page_count(doc.id),
            }
            for doc in controller.documents()
        ]
        print(json.dumps(rows, indent=2))
        return 0

    if args.command == 'rename':
        if controller.get(args.doc_id) is None:
            print(f'ERROR: unknown document id: {args.doc_id}')
            return 1
        controller.rename(args.doc_id, args.name)
        print(json.dumps({'id': args.doc_id, 'name': controller.get(args.doc_id).name}, indent=2))
        return 0

    if args.command == 'delete':
        controller.delete(args.doc_id)
        print(json.dumps({'id': args.doc_id, 'deleted': True}, indent=2))
        return 0

    if args.command == 'export':
        exported = controller.export_document(args.doc_id)
        if exported is None:
            print(f'ERROR: unknown document id: {args.doc_id}')
            return 1
        args.out_dir.mkdir(parents=True, exist_ok=True)
        out_path = args.out_dir / Path(exported.filename).name
        out_path.write_bytes(exported.data)
        print(json.dumps({'id': args.doc_id, 'path': str(out_path)}, indent=2))
        return 0

    if not args.pdf_path.exists():
        print(f'ERROR: file not found: {args.pdf_path}')
        return 1
    doc = controller.import_document(args.pdf_path.read_bytes())
    print(json.dumps({'id': doc.id, 'name': doc.name}, indent=2))
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
