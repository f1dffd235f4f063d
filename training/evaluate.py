"""
Run every labeled utterance through the rule table and report accuracy
per intent. Returns the misclassified examples.

    python -m training.evaluate
"""

from collections import Counter

from training.training_data import TRAINING_DATA
from classifier import classify


def _is_correct(example: dict, result) -> bool:
    if result.intent.value != example["intent"]:
        return False
    expected_id = example.get("tracking_id")
    return expected_id is None or result.tracking_id == expected_id


def evaluate(examples=TRAINING_DATA) -> list:
    seen = Counter()
    hits = Counter()
    failures = []

    for example in examples:
        result = classify(example["utterance"])
        seen[example["intent"]] += 1
        if _is_correct(example, result):
            hits[example["intent"]] += 1
            continue
        failures.append({
            "utterance": example["utterance"],
            "expected": (example["intent"], example.get("tracking_id")),
            "actual": (result.intent.value, result.tracking_id),
        })

    total = sum(seen.values())
    correct = sum(hits.values())
    print(f"\nRule table: {correct}/{total} correct ({correct / max(total, 1):.1%})")
    for intent in sorted(seen):
        print(f"  {intent:<16} {hits[intent]}/{seen[intent]}")

    for f in failures:
        print(f"  ✗ \"{f['utterance']}\" expected={f['expected']} got={f['actual']}")

    return failures


if __name__ == "__main__":
    evaluate()
