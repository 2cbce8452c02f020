#!/usr/bin/env python3
"""Validate fleet data YAML files against the schema."""
import os
import sys
from pathlib import Path

import yaml
from jsonschema import validate, ValidationError

# Data file name -> schema section in schema.yaml
DATA_FILES = {
    "vehicles.yaml": "vehicles",
    "checks.yaml": "checks",
}


def load_schema(section: str) -> dict:
    """Load one named JSON schema from schema.yaml."""
    schema_path = Path(__file__).parent / "schema.yaml"
    with open(schema_path) as f:
        return yaml.safe_load(f)[section]


def validate_data_file(filepath: Path, schema: dict) -> list[str]:
    """Validate a single data file. Returns list of errors."""
    errors = []
    try:
        with open(filepath) as f:
            data = yaml.safe_load(f)
        validate(instance=data if data is not None else [], schema=schema)
    except yaml.YAMLError as e:
        errors.append(f"YAML parse error: {e}")
    except ValidationError as e:
        errors.append(f"Schema validation error: {e.message}")
        if e.path:
            errors.append(f"  at path: {'.'.join(str(p) for p in e.path)}")
    except OSError as e:
        errors.append(f"Error: {e}")
    return errors


def main():
    """Validate vehicles.yaml and checks.yaml in the data directory."""
    data_dir = Path(
        os.environ.get("FLEETCHECK_DATA_DIR", Path(__file__).parent / "data")
    )

    if not data_dir.exists():
        print(f"Error: data directory not found: {data_dir}")
        return 1

    all_valid = True
    for filename, section in DATA_FILES.items():
        filepath = data_dir / filename
        if not filepath.exists():
            print(f"SKIP: {filename} (not found)")
            continue
        errors = validate_data_file(filepath, load_schema(section))
        if errors:
            print(f"FAIL: {filename}")
            for error in errors:
                print(f"  {error}")
            all_valid = False
        else:
            print(f"OK: {filename}")

    return 0 if all_valid else 1


if __name__ == "__main__":
    sys.exit(main())
