"""
Test data generators for docjson benchmarks.

Creates JSON text of different shapes:
- Small and large objects
- Arrays with mixed values (wrapped into a document when parsed)
- Deeply nested objects
- Strings full of escape sequences
- Commented text, parseable only with comments enabled
"""

import json
import random
import string
from typing import Any

_ESCAPE_PROBABILITY = 0.3
_ESCAPES = ['\\"', "\\\\", "\\/", "\\b", "\\f", "\\n", "\\r", "\\t"]

DATA_TYPES = [
    "small_object",
    "large_object",
    "mixed_array",
    "nested_structure",
    "string_heavy",
]


def generate_test_data(data_type: str) -> str:
    """Generates JSON test data based on specified type."""
    generators = {
        "small_object": _generate_small_object,
        "large_object": _generate_large_object,
        "mixed_array": _generate_mixed_array,
        "nested_structure": _generate_nested_structure,
        "string_heavy": _generate_string_heavy,
        "commented": _generate_commented,
    }

    if data_type not in generators:
        raise ValueError(f"Unknown data type: {data_type}")

    return generators[data_type]()


def _generate_small_object() -> str:
    """Generates a small JSON object (< 1KB)."""
    data = {
        "id": 12345,
        "name": "Alice Johnson",
        "active": True,
        "balance": 1234.56,
        "tags": ["admin", "beta"],
        "metadata": {"created": "2024-01-15T10:30:00Z", "source": None},
    }
    return json.dumps(data)


def _generate_large_object() -> str:
    """Generates a large JSON object (> 10KB) of records."""
    data = {
        "user_id": random.randint(1000000, 9999999),
        "records": [
            {
                "id": f"rec_{i:06d}",
                "amount": round(random.uniform(1.0, 1000.0), 2),
                "count": random.randint(0, 500),
                "label": _random_string(20),
                "flags": [random.choice([True, False]) for _ in range(3)],
            }
            for i in range(120)
        ],
    }
    return json.dumps(data)


def _generate_mixed_array() -> str:
    """Generates a top-level array with mixed value types."""
    choices = [
        lambda i: random.randint(-1000, 1000),
        lambda i: round(random.uniform(-100.0, 100.0), 3),
        lambda i: _random_string(random.randint(5, 30)),
        lambda i: random.choice([True, False]),
        lambda i: None,
        lambda i: {"index": i, "value": _random_string(10)},
    ]
    array: list[Any] = [random.choice(choices)(i) for i in range(200)]
    return json.dumps(array)


def _generate_nested_structure() -> str:
    """Generates a deeply nested JSON object."""

    def create_nested(depth: int) -> dict[str, Any]:
        if depth <= 0:
            return {"value": _random_string(10)}

        return {
            "level": depth,
            "items": [create_nested(depth - 1) for _ in range(2)],
            "nested": create_nested(depth - 1),
        }

    return json.dumps(create_nested(7))


def _generate_string_heavy() -> str:
    """Generates JSON with many string escape sequences."""

    def create_escaped_string() -> str:
        chars = []
        for _ in range(50):
            if random.random() < _ESCAPE_PROBABILITY:
                chars.append(random.choice(_ESCAPES))
            else:
                chars.append(
                    random.choice(string.ascii_letters + string.digits + " ")
                )
        return "".join(chars)

    parts = [
        f'"s{i}": "{create_escaped_string()}"' for i in range(100)
    ] + [
        f'"u{i}": "\\u{random.randint(0x00A0, 0x2FFF):04x}"' for i in range(50)
    ]
    return "{" + ", ".join(parts) + "}"


def _generate_commented() -> str:
    """Generates an object with a comment before every member."""
    members = [
        f"/* member {i} */ \"key_{i}\": {random.randint(0, 99)} // trailing\n"
        for i in range(100)
    ]
    return "// header\n{" + ", ".join(members) + "}"


def _random_string(length: int) -> str:
    """Generates a random string of specified length."""
    return "".join(random.choices(string.ascii_letters, k=length))
