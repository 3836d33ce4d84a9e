#!/usr/bin/env python3
"""Convert flow-shop text instances into a single Excel workbook.

Every ``.txt`` file in the input directory is parsed with
``flowshop.instance.read_instances`` and written as one sheet (header row
``n m`` followed by one row per job). ``read_workbook`` reads it back.

Usage
-----

```
python scripts/convert_instances.py --input-dir data --output data/Instances.xlsx
```

Dependencies: pandas with the xlsxwriter engine.
"""

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if SRC.exists():
    sys.path.insert(0, str(SRC))

from flowshop.instance import read_instances, write_workbook


def main() -> None:
    parser = argparse.ArgumentParser(description="Convert flow-shop instances to an Excel workbook")
    parser.add_argument(
        "--input-dir",
        type=str,
        required=True,
        help="Directory containing .txt instance files",
    )
    parser.add_argument(
        "--output",
        type=str,
        required=True,
        help="Path to the output Excel file",
    )
    args = parser.parse_args()
    input_dir = Path(args.input_dir)
    if not input_dir.is_dir():
        raise FileNotFoundError(f"Input directory {input_dir} does not exist or is not a directory")
    instances = read_instances(input_dir)
    if not instances:
        raise FileNotFoundError(f"No .txt files found in {input_dir}")
    write_workbook(instances, args.output)
    print(f"Wrote {len(instances)} instances to {args.output}")


if __name__ == "__main__":
    main()
