"""Entrypoint de linha de comando do publicador Apperian.

Uso:
    apperian-publish -u USER -p PASS -i BUNDLE_ID -t ios app.ipa
    python -m app.cli --h
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import signal
import sys
from contextlib import suppress
from pathlib import Path
from typing import TYPE_CHECKING

from api.validators.apperian import PublishOptions, build_workflow_config
from app.bootstrap import create_publish_use_case, initialize_app, validate_runtime_settings
from app.domain import PublishStatus
from app.observability import reset_correlation_id, set_correlation_id
from utils.errors import ValidationError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from app.domain import PublishResult, WorkflowConfig
    from app.use_cases.publish import PublishApplicationUseCase

logger = logging.getLogger(__name__)

HELP_FILE = Path(__file__).parent / "help.txt"

EXIT_SUCCESS = 0
EXIT_FAILED = 1
EXIT_INVALID_INPUT = 2
EXIT_CANCELLED = 130

_EXIT_CODES: dict[PublishStatus, int] = {
    PublishStatus.SUCCESS: EXIT_SUCCESS,
    PublishStatus.FAILED: EXIT_FAILED,
    PublishStatus.CANCELLED: EXIT_CANCELLED,
}


def build_parser() -> argparse.ArgumentParser:
    """Cria o parser com as flags do publicador (ajuda própria via --h)."""
    parser = argparse.ArgumentParser(
        prog="apperian-publish",
        add_help=False,
        description="Publica um binário mobile no Apperian.",
    )
    parser.add_argument("-u", "--username")
    parser.add_argument("-p", "--password")
    parser.add_argument("-i", "--appid", "--appId", dest="appid")
    parser.add_argument("-t", "--apptype", "--appType", dest="apptype")
    parser.add_argument("--filepath", "--filePath", dest="filepath")
    parser.add_argument("positional_filepath", nargs="?", metavar="FILEPATH")
    parser.add_argument("-n", "--appname", "--appName", dest="appname")
    parser.add_argument("-v", "--appversion", "--appVersion", dest="appversion")
    parser.add_argument("-a", "--appauthor", "--appAuthor", dest="appauthor")
    parser.add_argument("-l", "--longdesc", "--longDesc", dest="longdesc")
    parser.add_argument("-s", "--shortdesc", "--shortDesc", dest="shortdesc")
    parser.add_argument("-c", "--versionnotes", "--versionNotes", dest="versionnotes")
    parser.add_argument("--create", action="store_true")
    parser.add_argument("--sign")
    parser.add_argument("--dolog", action="store_true")
    parser.add_argument("--deviceid", "--deviceId", dest="deviceid")
    parser.add_argument("--protocol", choices=("ease", "rest"))
    parser.add_argument("-h", "--h", "--help", dest="show_help", action="store_true")
    return parser


def options_from_args(args: argparse.Namespace) -> PublishOptions:
    """Converte o namespace do argparse nas opções brutas do validador."""
    return PublishOptions(
        username=args.username,
        password=args.password,
        app_id=args.appid,
        file_path=args.filepath or args.positional_filepath,
        app_type=args.apptype,
        app_name=args.appname,
        app_version=args.appversion,
        app_author=args.appauthor,
        long_description=args.longdesc,
        short_description=args.shortdesc,
        version_notes=args.versionnotes,
        create=args.create,
        sign=args.sign,
        device_id=args.deviceid,
    )


def load_help_text() -> str:
    """Lê o documento de ajuda empacotado."""
    return HELP_FILE.read_text(encoding="utf-8")


async def run_publish(
    use_case: PublishApplicationUseCase,
    config: WorkflowConfig,
) -> PublishResult:
    """Executa o fluxo com SIGINT/SIGTERM ligados ao evento de cancelamento."""
    cancel_event = asyncio.Event()
    loop = asyncio.get_running_loop()
    installed: list[signal.Signals] = []
    for sig in (signal.SIGINT, signal.SIGTERM):
        with suppress(NotImplementedError, RuntimeError):
            loop.add_signal_handler(sig, cancel_event.set)
            installed.append(sig)
    try:
        return await use_case.execute(config, cancel_event)
    finally:
        for sig in installed:
            loop.remove_signal_handler(sig)


def main(argv: Sequence[str] | None = None) -> int:
    """Ponto de entrada do console script; retorna o código de saída."""
    args = build_parser().parse_args(argv)

    if args.show_help:
        print(load_help_text())
        return EXIT_SUCCESS

    token = set_correlation_id()
    try:
        try:
            initialize_app(do_log=args.dolog, protocol=args.protocol)
            config = build_workflow_config(options_from_args(args))
            validate_runtime_settings()
            use_case = create_publish_use_case(protocol=args.protocol)
        except (ValidationError, RuntimeError, ValueError) as exc:
            logger.error("publish_input_invalid", extra={"error": str(exc)})
            print(f"Erro: {exc}", file=sys.stderr)
            return EXIT_INVALID_INPUT

        result = asyncio.run(run_publish(use_case, config))
    finally:
        reset_correlation_id(token)

    if result.success:
        print(f"Aplicação publicada e habilitada: {result.application_id}")
    elif result.status is PublishStatus.CANCELLED:
        print("Execução cancelada", file=sys.stderr)
    else:
        print(f"Erro [{result.error_code}]: {result.error_message}", file=sys.stderr)
    return _EXIT_CODES[result.status]


if __name__ == "__main__":
    sys.exit(main())
