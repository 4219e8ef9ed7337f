#!/usr/bin/env python3
"""Exercise a running instance of the API.

Creating an event posts a real message to the configured Slack channel.

Usage:
    python scripts/helper/smoke_test_api.py [base_url] [--create]
"""

import sys
import json
import logging
import argparse

import requests

# Set up logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

SAMPLE_EVENT = {
    "title": "Smoke Test Event",
    "organizer": "Smoke Tester",
    "startDate": "2030-01-01",
    "startTime": "09:00",
    "endDate": "2030-01-01",
    "endTime": "10:00",
    "email": "smoke@example.com",
    "tags": ["smoke-test"],
}

def smoke_test(base_url: str, create: bool = False):
    api = f"{base_url.rstrip('/')}/api/v1"

    response = requests.get(f"{api}/ping", timeout=10)
    logger.info(f"Ping: {response.status_code} {response.json()}")

    response = requests.get(f"{api}/event/all", timeout=10)
    events = response.json()
    logger.info(f"List: {response.status_code}, {len(events)} published events")
    if events:
        logger.info(json.dumps(events[0], indent=2, ensure_ascii=False))

    if create:
        response = requests.post(f"{api}/event/new", json=SAMPLE_EVENT, timeout=30)
        logger.info(f"Create: {response.status_code} {response.json()}")
        if response.ok:
            event_id = response.json()["id"]
            response = requests.get(f"{api}/event/{event_id}", timeout=10)
            logger.info(f"Get before approval (expect 404): {response.status_code}")

    response = requests.get(f"{api}/event/999999999", timeout=10)
    logger.info(f"Non-existent event (expect 404): {response.status_code}")

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Smoke test a running API")
    parser.add_argument('base_url', nargs='?', default="http://localhost:8000")
    parser.add_argument('--create', action='store_true', help="Also submit a sample event")
    args = parser.parse_args()
    smoke_test(args.base_url, create=args.create)
