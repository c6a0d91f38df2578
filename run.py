import os
import sys
import argparse
from dotenv import load_dotenv
import uvicorn

# Load .env before importing the application settings
load_dotenv()


def main():
    """Run the exporter."""
    parser = argparse.ArgumentParser(
        description="Prometheus exporter for Redfish BMC status",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Scrape the BMC configured in REDFISH_HOST
  REDFISH_HOST=10.0.0.10 REDFISH_USERNAME=root REDFISH_PASSWORD=secret python run.py

  # Listen on all interfaces
  python run.py --host 0.0.0.0 --port 9610

  # Refuse to start when the default target is unreachable
  python run.py --exit-on-bootstrap-failure

Endpoints:
  - Default target:    http://localhost:9610/metrics
  - Scrape a target:   http://localhost:9610/redfish?target=<bmc-host>
  - Exporter metrics:  http://localhost:9610/exporter/metrics
        """
    )

    parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Address to bind (default: 127.0.0.1)"
    )

    parser.add_argument(
        "--port",
        type=int,
        default=9610,
        help="Port to bind (default: 9610)"
    )

    parser.add_argument(
        "--target",
        default=None,
        help="Default Redfish target, overrides REDFISH_HOST"
    )

    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level, overrides LOG_LEVEL"
    )

    parser.add_argument(
        "--exit-on-bootstrap-failure",
        action="store_true",
        help="Stop instead of serving redfish_up 0 when the default target is unreachable"
    )

    parser.add_argument(
        "--reload",
        action="store_true",
        default=False,
        help="Restart on code changes (development only)"
    )

    args = parser.parse_args()

    if args.target:
        os.environ["REDFISH_HOST"] = args.target
    if args.log_level:
        os.environ["LOG_LEVEL"] = args.log_level
    if args.exit_on_bootstrap_failure:
        os.environ["EXIT_ON_BOOTSTRAP_FAILURE"] = "true"

    from redfish_exporter.config import Settings
    from redfish_exporter.logging_config import setup_logging

    settings = Settings()
    setup_logging(settings.LOG_LEVEL)

    print(f"Redfish Exporter listening on http://{args.host}:{args.port}")
    print(f"   - Default target: {settings.REDFISH_HOST or '(none)'}")

    try:
        uvicorn.run(
            "redfish_exporter.main:app",
            host=args.host,
            port=args.port,
            reload=args.reload,
            log_config=None
        )
    except KeyboardInterrupt:
        print("\nShutting down...")
    except Exception as e:
        print(f"Exporter failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
