#!/usr/bin/env python3
"""
ParkBridge - Main Entry Point

A MangaPark catalog provider with a small command-line front end.

Usage:
    python main.py search "one piece"
    python main.py chapters 75577
    python main.py pages 9061412
    python main.py details 75577 --json

Requirements:
    pip install -e .
"""
import logging
import sys
from pathlib import Path

# Add current directory to path for imports
current_dir = Path(__file__).parent
sys.path.insert(0, str(current_dir))

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def check_dependencies():
    """Check if required dependencies are installed."""
    required_modules = [
        ('rich', 'rich'),
        ('typer', 'typer'),
        ('httpx', 'httpx'),
        ('yaml', 'PyYAML'),  # PyYAML imports as 'yaml'
    ]

    missing_modules = []

    for import_name, package_name in required_modules:
        try:
            __import__(import_name)
        except ImportError:
            missing_modules.append(package_name)

    if missing_modules:
        print("Missing required dependencies:")
        for module in missing_modules:
            print(f"   - {module}")

        print("\nInstall with:")
        print(f"   pip install {' '.join(missing_modules)}")
        return False

    return True


def setup_logging(config):
    """Configure console logging and, when configured, a log file."""
    level = getattr(logging, config.log_level, logging.INFO)
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stderr)
        ]
    )
    logging.getLogger().setLevel(level)

    log_file = config.log_file
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logging.getLogger().addHandler(file_handler)
        return file_handler

    return None


def config_path_from_args(args):
    """
    Find the --config/-c value in the command line before Typer parses it.

    Logging has to be configured from the same file the commands use,
    and it is set up before the app runs.
    """
    for i, arg in enumerate(args):
        if arg == '--':
            break
        if arg.startswith('--config='):
            return arg.split('=', 1)[1] or None
        if arg in ('--config', '-c') and i + 1 < len(args):
            return args[i + 1]
    return None


def main(args=None):
    """Main entry point for ParkBridge."""
    if not check_dependencies():
        return 1

    from core.config import Config
    from cli.app import app

    if args is None:
        args = sys.argv[1:]

    setup_logging(Config(config_path_from_args(args)))

    # Typer exits the process itself with the command's exit code
    app(args=args, prog_name="parkbridge")
    return 0


if __name__ == "__main__":
    exit_code = main()
    sys.exit(exit_code)
