"""Demo stage: records the sequence length next to the input."""

import json
import sys


def main(path):
    with open(path, encoding="utf-8") as f:
        args = json.load(f)

    sequence = args.get("sequence", "")
    if not isinstance(sequence, str):
        print("sequence must be a string")
        return

    args["length"] = len(sequence.strip())
    with open(path, "w", encoding="utf-8") as f:
        json.dump(args, f)


if __name__ == "__main__":
    main(sys.argv[1])
