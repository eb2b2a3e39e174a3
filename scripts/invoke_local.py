#!/usr/bin/env python3
"""
Run the Lambda handler locally.

Builds a minimal Lambda context, invokes the handler once and prints
the result as JSON.
"""

import argparse
import json
import sys
import uuid
from types import SimpleNamespace
from typing import Optional


def build_context(request_id: Optional[str] = None) -> SimpleNamespace:
    """
    Build a stand-in for the Lambda context object.

    Args:
        request_id: Request id to report (random UUID if None)

    Returns:
        Object exposing aws_request_id and function_name
    """
    return SimpleNamespace(
        aws_request_id=request_id or str(uuid.uuid4()),
        function_name="cep-loader-local",
    )


def invoke(
    postal_code: Optional[str] = None, request_id: Optional[str] = None
) -> dict:
    """
    Invoke the handler once.

    Args:
        postal_code: Override for the POSTAL_CODE setting
        request_id: Request id for the fake context

    Returns:
        The handler result dict
    """
    from cep_loader.config import Settings, settings
    from cep_loader.lambda_handler import lambda_handler

    if postal_code:
        # Re-run validation on the override
        settings.postal_code = Settings(postal_code=postal_code).postal_code

    return lambda_handler({}, build_context(request_id))


def main(argv: Optional[list] = None) -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Invoke the CEP loader handler locally",
    )
    parser.add_argument(
        "--postal-code",
        type=str,
        help="Postal code to look up (default: POSTAL_CODE setting)",
    )
    parser.add_argument(
        "--request-id",
        type=str,
        help="Request id for the fake Lambda context",
    )
    args = parser.parse_args(argv)

    result = invoke(args.postal_code, args.request_id)
    print(json.dumps(result, indent=2, ensure_ascii=False))

    if result["status"] != "persisted":
        sys.exit(1)


if __name__ == "__main__":
    main(sys.argv[1:])
