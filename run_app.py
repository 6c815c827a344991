#!/usr/bin/env python3
"""
Print Store Backend Runner
==========================

Runs the Kids 3D Print Store API in different modes.

Usage:
    python run_app.py                    # Development mode with auto-reload (default)
    python run_app.py --mode prod        # Production mode
    python run_app.py --port 8081        # Custom port
    python run_app.py --host 127.0.0.1   # Custom host
"""

import argparse
import os
import sys

from printshop.core.config import settings

def print_banner():
    """Print application banner"""
    banner = """
╔═══════════════════════════════════════════════════════╗
║              🖨️  Kids 3D Print Store API               ║
╚═══════════════════════════════════════════════════════╝
    """
    print(banner)

def check_environment():
    """Report what the app will start with"""
    print("\n🔍 Checking environment...")

    if os.path.exists(".env"):
        print("✅ .env file found")
    else:
        print("⚠️  .env file not found, using defaults")

    print(f"🗄️  Database: {settings.DATABASE_URL}")
    if settings.STRICT_STATUS_TRANSITIONS:
        print("🔒 Strict order status transitions enabled")

def run_app(host: str, port: int, reload: bool, workers: int):
    """Run the FastAPI application"""
    print(f"\n🚀 Starting {settings.APP_NAME} on {host}:{port}")
    print(f"📖 API Docs: http://{host}:{port}/api/docs")
    print("\n" + "=" * 50)

    import uvicorn
    uvicorn.run(
        "printshop.main:app",
        host=host,
        port=port,
        reload=reload,
        workers=1 if reload else workers,
        log_level=settings.LOG_LEVEL.lower()
    )

def main():
    parser = argparse.ArgumentParser(
        description="Kids 3D Print Store API runner",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--mode",
        choices=["dev", "prod"],
        default="dev",
        help="Server mode (default: dev)"
    )
    parser.add_argument(
        "--host",
        default=settings.HOST,
        help=f"Host to bind to (default: {settings.HOST})"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=settings.PORT,
        help=f"Port to bind to (default: {settings.PORT})"
    )
    parser.add_argument(
        "--no-reload",
        action="store_true",
        help="Disable auto-reload"
    )

    args = parser.parse_args()

    print_banner()
    check_environment()

    reload = not args.no_reload and args.mode != "prod"
    run_app(args.host, args.port, reload, settings.WORKERS)

    return 0

if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\n👋 Goodbye!")
        sys.exit(0)
