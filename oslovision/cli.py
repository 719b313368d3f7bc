"""CLI entry point for oslovision."""

from __future__ import annotations

import argparse
import getpass
import json
import sys
from pathlib import Path

from loguru import logger

from oslovision.client import OsloClient
from oslovision.config import (
    DEFAULT_BASE_URL,
    ClientConfig,
    get_config_path,
    require_interactive,
)
from oslovision.exceptions import OsloVisionError


class CliApp:
    """Command-line interface for oslovision."""

    def __init__(self) -> None:
        """Initialize parser and command definitions."""
        self._parser = self._build_parser()

    def _build_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            prog="oslovision",
            description="Oslo dataset API utilities.",
        )
        parser.add_argument(
            "--config",
            default=None,
            help=(
                "Path to YAML config (default: ~/.config/oslovision/config.yaml "
                "or OSLOVISION_CONFIG)."
            ),
        )
        subparsers = parser.add_subparsers(dest="command", required=True)

        self._add_setup_parser(subparsers)
        subparsers.add_parser("test", help="Check API availability and token.")
        self._add_image_parser(subparsers)
        self._add_annotate_parser(subparsers)
        self._add_export_parser(subparsers)

        return parser

    def _add_setup_parser(
        self,
        subparsers: argparse._SubParsersAction[argparse.ArgumentParser],
    ) -> None:
        """Add the ``setup`` command parser."""
        parser = subparsers.add_parser(
            "setup",
            help="Save API token and base URL to the config file.",
        )
        parser.add_argument("--token", default=None, help="Oslo API token.")
        parser.add_argument("--base-url", default=None, help="Oslo API base URL.")

    def _add_image_parser(
        self,
        subparsers: argparse._SubParsersAction[argparse.ArgumentParser],
    ) -> None:
        """Add the ``add-image`` command parser."""
        parser = subparsers.add_parser(
            "add-image",
            help="Upload a local image or register an image URL.",
        )
        parser.add_argument("--project", "-p", required=True, help="Project ID.")
        parser.add_argument("image", help="Image file path or http(s) URL.")
        parser.add_argument("--split", default="train", help="Dataset split.")
        parser.add_argument("--status", default="pending", help="Image status.")

    def _add_annotate_parser(
        self,
        subparsers: argparse._SubParsersAction[argparse.ArgumentParser],
    ) -> None:
        """Add the ``annotate`` command parser."""
        parser = subparsers.add_parser(
            "annotate",
            help="Create a bounding-box annotation on an image.",
        )
        parser.add_argument("--project", "-p", required=True, help="Project ID.")
        parser.add_argument("--image", "-i", required=True, help="Image ID.")
        parser.add_argument("--label", "-l", required=True, help="Annotation label.")
        parser.add_argument("--x0", type=float, required=True, help="Left, px.")
        parser.add_argument("--y0", type=float, required=True, help="Top, px.")
        parser.add_argument("--width", type=float, required=True, help="Width, px.")
        parser.add_argument("--height", type=float, required=True, help="Height, px.")

    def _add_export_parser(
        self,
        subparsers: argparse._SubParsersAction[argparse.ArgumentParser],
    ) -> None:
        """Add the ``export`` command parser."""
        parser = subparsers.add_parser(
            "export",
            help="Download a dataset export and extract it.",
        )
        parser.add_argument("--project", "-p", required=True, help="Project ID.")
        parser.add_argument(
            "--version", "-v", type=int, required=True, help="Export version."
        )
        parser.add_argument(
            "--output-dir",
            "-o",
            default=".",
            help="Directory to extract the export into (default: current).",
        )

    @staticmethod
    def _print_result(result: object) -> None:
        """Print a decoded API response as indented JSON."""
        print(json.dumps(result, indent=2, ensure_ascii=False))  # noqa: T201

    def _run_setup(self, args: argparse.Namespace, config_path: Path) -> None:
        """Save token / base URL, prompting for whatever was not passed."""
        existing = ClientConfig.from_file(config_path)
        base_url = args.base_url
        token = args.token
        if base_url is None or token is None:
            require_interactive("Pass --token and --base-url to 'setup'.")
        if base_url is None:
            default = existing.base_url or DEFAULT_BASE_URL
            base_url = input(f"Oslo API base URL [{default}]: ").strip() or default
        if token is None:
            prompt = "Oslo API token"
            if existing.token:
                prompt += f" [{existing.masked_token()}]"
            token = getpass.getpass(f"{prompt}: ").strip() or existing.token
            if not token:
                logger.warning("Token not set; it can be added later.")
        cfg = ClientConfig(token=token, base_url=base_url)
        saved_path = cfg.save_to_file(config_path)
        logger.info(f"Done! Configuration saved to {saved_path}")

    def _run_api_command(self, args: argparse.Namespace, config_path: Path) -> None:
        """Run one of the commands that talk to the API."""
        with OsloClient(ClientConfig.load(config_path)) as client:
            if args.command == "test":
                self._print_result(client.test_api())
            elif args.command == "add-image":
                self._print_result(
                    client.add_image(
                        args.project, args.image, split=args.split, status=args.status
                    )
                )
            elif args.command == "annotate":
                self._print_result(
                    client.create_annotation(
                        args.project,
                        args.image,
                        args.label,
                        x0=args.x0,
                        y0=args.y0,
                        width_px=args.width,
                        height_px=args.height,
                    )
                )
            elif args.command == "export":
                path = client.download_export(
                    args.project, args.version, output_dir=args.output_dir
                )
                print(path)  # noqa: T201
            else:
                sys.exit(f"Unknown command: {args.command}")

    def _run_command(self, args: argparse.Namespace) -> None:
        """Dispatch parsed args to the target command implementation."""
        config_path = get_config_path(Path(args.config) if args.config else None)
        if args.command == "setup":
            self._run_setup(args, config_path)
            return
        self._run_api_command(args, config_path)

    def run(self, argv: list[str] | None = None) -> None:
        """Run the CLI with the given arguments."""
        args = self._parser.parse_args(argv)
        try:
            self._run_command(args)
        except OsloVisionError as e:
            sys.exit(f"Error: {e}")


def main(argv: list[str] | None = None) -> None:
    """Compatibility entry point for setuptools/CLI wrappers."""
    CliApp().run(argv)


if __name__ == "__main__":
    main()
