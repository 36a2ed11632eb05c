import argparse
import json
import sys

from app.config.settings import Settings
from app.fetch.source_fetcher import build_http_client
from app.logging.logger import Log
from app.processor.processor import build_processor
from app.storage.client import build_s3_client


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="thumbnail-pdf",
        description="Render the first page of a remote PDF and upload it as a PNG thumbnail.",
    )
    parser.add_argument("url", help="URL of the PDF file to process")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Entry point: load settings -> build shared clients -> run one pipeline."""
    args = parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level, stream=sys.stderr)

    http_client = build_http_client(settings)
    try:
        processor = build_processor(settings, http_client, build_s3_client(settings))
        result = processor.process(args.url)
    finally:
        http_client.close()

    print(json.dumps(result.to_response()))
    return 0 if result.success else 1


if __name__ == "__main__":
    sys.exit(main())
