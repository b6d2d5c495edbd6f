#!/usr/bin/env python3
"""
fsvalue_check.py - golden vector checker for the tagged document codec

Usage:
  python scripts/fsvalue_check.py                 # runs over tests/vectors
  python scripts/fsvalue_check.py <vector.json>   # checks a single vector
  python scripts/fsvalue_check.py --root DIR      # runs over DIR/valid, DIR/invalid

A valid vector is {"value": {...}, "document": {...}}: encoding the value must
give the document and decoding the document must give the value back.
An invalid vector is {"document": {...}} and must be rejected on decode.
Exits non-zero on failure.
"""
import argparse, glob, json, os, pathlib, sys

# Local import when running from repo root
sys.path.insert(0, str(pathlib.Path(__file__).resolve().parents[1] / "impl" / "python" / "fsvalue"))
import fsvalue  # noqa: E402

def load_vector(path: str) -> dict:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)

def check_valid(vec: dict) -> str:
    """Return an empty string when the vector holds, else the reason it doesn't."""
    enc = fsvalue.encode_document(vec["value"])
    if enc != vec["document"]:
        return "encode mismatch"
    dec = fsvalue.decode_document(vec["document"])
    if dec != vec["value"]:
        return "decode mismatch"
    return ""

def check_invalid(vec: dict) -> str:
    try:
        fsvalue.decode_document(vec["document"])
    except fsvalue.Error:
        return ""
    return "invalid document accepted"

def check_path(path: str, valid: bool) -> str:
    try:
        vec = load_vector(path)
    except (OSError, ValueError) as e:
        return f"unreadable vector: {e}"
    if not valid:
        return check_invalid(vec)
    try:
        return check_valid(vec)
    except fsvalue.Error as e:
        return f"valid vector rejected: {e.__class__.__name__}"

def run_vectors(root: str) -> int:
    ok = 0; bad = 0
    valid = sorted(glob.glob(os.path.join(root, "valid", "*.json")))
    invalid = sorted(glob.glob(os.path.join(root, "invalid", "*.json")))
    for p, is_valid in [(p, True) for p in valid] + [(p, False) for p in invalid]:
        why = check_path(p, is_valid)
        if why:
            print(f"[FAIL] {os.path.basename(p)}: {why}")
            bad += 1
        else:
            ok += 1
    print(f"\nSummary: {ok} ok, {bad} failed")
    return 1 if bad else 0

def main(argv=None):
    ap = argparse.ArgumentParser()
    ap.add_argument("vector", nargs="?", help="single vector file; its parent dir name picks valid/invalid")
    ap.add_argument("--root", default=os.path.join("tests", "vectors"))
    args = ap.parse_args(argv)

    if args.vector:
        is_valid = pathlib.Path(args.vector).parent.name != "invalid"
        why = check_path(args.vector, is_valid)
        if why:
            print(f"Rejected: {why}")
            return 1
        print("OK")
        return 0
    return run_vectors(args.root)

if __name__ == "__main__":
    sys.exit(main())
