from .main import create_parser, main, run_cli

__all__ = ["create_parser", "main", "run_cli"]
