"""
Test data generators for decoding benchmarks.

Creates the kinds of documents optimistic decoding is used on (API
responses, structured log records, streamed tool-call arguments) plus
truncated copies of them that simulate output cut off mid-stream.
"""

import json
import random
import string
from typing import Any

_SEED = 20240115
_ESCAPE_PROBABILITY = 0.3


def generate_test_data(data_type: str) -> str:
    """Generates a well-formed JSON document of the given type."""
    generators = {
        "api_response": _generate_api_response,
        "log_records": _generate_log_records,
        "tool_call": _generate_tool_call,
        "nested_structure": _generate_nested_structure,
        "string_heavy": _generate_string_heavy,
    }

    if data_type not in generators:
        raise ValueError(f"Unknown data type: {data_type}")

    # Fixed seed so every library decodes the same document
    rng = random.Random(_SEED)
    return json.dumps(generators[data_type](rng))


def generate_truncated_data(data_type: str, fraction: float = 0.5) -> str:
    """Generates a document of ``data_type`` cut after ``fraction`` of it."""
    if not 0.0 < fraction <= 1.0:
        raise ValueError(f"fraction must be in (0, 1], got {fraction}")

    document = generate_test_data(data_type)
    return document[: max(1, int(len(document) * fraction))]


def _generate_api_response(rng: random.Random) -> dict[str, Any]:
    """A chat-completion style response with a few content blocks."""
    return {
        "id": f"msg_{_random_string(rng, 24)}",
        "type": "message",
        "role": "assistant",
        "model": "example-model-1",
        "content": [
            {"type": "text", "text": _random_sentence(rng, 40)}
            for _ in range(5)
        ],
        "stop_reason": rng.choice(["end_turn", "max_tokens", None]),
        "usage": {
            "input_tokens": rng.randint(10, 5000),
            "output_tokens": rng.randint(10, 5000),
            "cache_hit_ratio": round(rng.random(), 4),
        },
    }


def _generate_log_records(rng: random.Random) -> list[dict[str, Any]]:
    """A batch of structured log lines."""
    return [
        {
            "ts": f"2024-{rng.randint(1, 12):02d}-{rng.randint(1, 28):02d}"
            f"T{rng.randint(0, 23):02d}:{rng.randint(0, 59):02d}:00Z",
            "level": rng.choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
            "logger": rng.choice(["http", "db.pool", "worker", "auth"]),
            "msg": _random_sentence(rng, 12),
            "latency_ms": round(rng.uniform(0.1, 900.0), 3),
            "status": rng.choice([200, 201, 204, 400, 404, 500]),
            "retry": rng.random() < 0.1,
            "trace_id": None if rng.random() < 0.5 else _random_string(rng, 16),
        }
        for _ in range(200)
    ]


def _generate_tool_call(rng: random.Random) -> dict[str, Any]:
    """Tool-call arguments as a model would stream them."""
    return {
        "name": "search_flights",
        "arguments": {
            "origin": "SFO",
            "destination": rng.choice(["JFK", "LHR", "NRT", "SYD"]),
            "passengers": rng.randint(1, 6),
            "flexible": rng.choice([True, False]),
            "max_price": round(rng.uniform(100.0, 4000.0), 2),
            "filters": {
                "airlines": [_random_string(rng, 2).upper() for _ in range(8)],
                "stops": [0, 1],
                "cabin": "economy",
            },
            "notes": _random_sentence(rng, 30),
        },
    }


def _generate_nested_structure(rng: random.Random) -> dict[str, Any]:
    """A deeply nested tree of objects and arrays."""

    def create_nested_dict(depth: int) -> dict[str, Any]:
        if depth <= 0:
            return {"value": _random_string(rng, 10)}

        return {
            "level": depth,
            "data": _random_string(rng, 15),
            "items": [create_nested_dict(depth - 1) for _ in range(3)],
            "nested": create_nested_dict(depth - 1),
        }

    return create_nested_dict(7)


def _generate_string_heavy(rng: random.Random) -> dict[str, Any]:
    """Strings dense with characters that need escaping."""

    def create_escaped_string() -> str:
        chars = []
        for _ in range(50):
            if rng.random() < _ESCAPE_PROBABILITY:
                chars.append(rng.choice(['"', "\\", "/", "\n", "\t", "\xe9"]))
            else:
                chars.append(
                    rng.choice(string.ascii_letters + string.digits + " ")
                )
        return "".join(chars)

    return {
        "strings": [create_escaped_string() for _ in range(100)],
        "paths": [
            f"C:\\Users\\{_random_string(rng, 8)}\\file_{i}.txt"
            for i in range(50)
        ],
    }


def _random_string(rng: random.Random, length: int) -> str:
    return "".join(rng.choices(string.ascii_letters, k=length))


def _random_sentence(rng: random.Random, words: int) -> str:
    return " ".join(
        _random_string(rng, rng.randint(2, 9)) for _ in range(words)
    )
