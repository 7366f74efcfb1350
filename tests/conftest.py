import json

import pytest


@pytest.fixture
def endpoint_json():
    return {"serviceName": "frontend", "ipv4": "10.0.0.1", "port": 8080}


@pytest.fixture
def span_json(endpoint_json):
    return {
        "traceId": "463ac35c9f6413ad",
        "name": "get /users",
        "id": "17133d482ba4f605",
        "parentId": "b6dbb1c2b362bf51",
        "timestamp": 1500000000000000,
        "duration": 2000,
        "annotations": [
            {"timestamp": 1500000000000000, "value": "sr", "endpoint": endpoint_json},
            {"timestamp": 1500000000002000, "value": "ss", "endpoint": endpoint_json},
        ],
        "binaryAnnotations": [
            {"key": "http.path", "value": "/users", "endpoint": endpoint_json},
        ],
    }


@pytest.fixture
def root_span_json():
    return {
        "traceId": "48485a3953bb61246453f91ca2d4880f",
        "name": "main",
        "id": "6453f91ca2d4880f",
        "annotations": [],
        "binaryAnnotations": [],
    }


@pytest.fixture
def encoded_spans(span_json, root_span_json):
    return json.dumps([span_json, root_span_json]).encode("utf-8")
