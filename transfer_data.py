import sys
import json
from app import app
from errors import HabitTrackerError
from services.transfer_service import export_data, import_data

USAGE = "usage: python transfer_data.py export|import <file.json>"

def main(argv):
    if len(argv) != 2 or argv[0] not in ('export', 'import'):
        print(USAGE)
        return 2

    command, path = argv
    with app.app_context():
        if command == 'export':
            data = export_data()
            with open(path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2)
            print(f"Exported {len(data['habits'])} habits to {path}")
            return 0

        try:
            with open(path, encoding='utf-8') as f:
                payload = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            print(f"FAILURE: could not read {path}: {e}")
            return 1

        try:
            counts = import_data(payload)
        except HabitTrackerError as e:
            print(f"FAILURE: {e.message}")
            return 1

        print(f"SUCCESS: imported {counts['habits']} habits and {counts['completions']} completions.")
        return 0

if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
