"""Usage example: export every document of an index with scan and scroll.

Run against an active cluster. Configure via env vars (ELASTICSEARCH_URL,
ELASTICSEARCH_HOST, etc.) or pass overrides directly.

    python -m es_handler.example orders all
"""

import argparse
import json
import logging
import sys
from datetime import timedelta

from es_handler import SearchClientError, create_client, load_config, scan_and_scroll

logger = logging.getLogger(__name__)


def main() -> int:
    parser = argparse.ArgumentParser(description="Dump an index as JSON lines.")
    parser.add_argument("index")
    parser.add_argument("doc_type")
    parser.add_argument("--size", type=int, default=100, help="documents per page")
    parser.add_argument("--expire", type=int, default=60, help="keep-alive in seconds")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")

    body = json.dumps({"query": {"match_all": {}}, "size": args.size})
    exported = 0
    with create_client(config=load_config()) as client:
        try:
            for page in scan_and_scroll(
                client, args.index, args.doc_type, timedelta(seconds=args.expire), body
            ):
                for hit in page:
                    sys.stdout.write(json.dumps({"_id": hit.id, "_source": hit.source}) + "\n")
                exported += len(page)
        except SearchClientError as exc:
            logger.error("Export stopped after %d documents: %s", exported, exc)
            return 1

    logger.info("Exported %d documents", exported)
    return 0


if __name__ == "__main__":
    sys.exit(main())
