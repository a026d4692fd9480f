"""esbundle CLI.

Usage:
    esbundle cache-clear [--connection default]
    esbundle status
    esbundle create [--connection default]
    esbundle drop --connection default --confirm
    esbundle recreate --connection default --confirm

환경변수:
    ES_BUNDLE_CONFIG   설정 파일 경로 (기본: ./configs/elasticsearch.yaml)
"""

from __future__ import annotations

import argparse
import logging
import sys

from rich.console import Console
from rich.table import Table

from esbundle.errors import ConnectionNotFoundError, ESBundleError
from esbundle.wiring.bundle import ElasticsearchBundle
from esbundle.wiring.registry import DEFAULT_MANAGER, ServiceRegistry

logger = logging.getLogger(__name__)
console = Console()


def _format_bytes(size_bytes: int | float) -> str:
    """바이트를 읽기 쉬운 형식으로 변환."""
    size = float(size_bytes)
    for unit in ["B", "KB", "MB", "GB"]:
        if size < 1024:
            return f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} TB"


def cmd_cache_clear(registry: ServiceRegistry, name: str) -> int:
    """커넥션 인덱스 캐시 비우기.

    Raises:
        ConnectionNotFoundError: 해당 이름의 커넥션이 없는 경우
    """
    registry.manager(name).get_connection().clear_cache()
    console.print(f"Elasticsearch cache has been cleared for {name} index.")
    return 0


def cmd_status(registry: ServiceRegistry) -> int:
    """매니저별 인덱스 상태 출력."""
    table = Table(title="Elasticsearch Index Status", show_header=True)
    table.add_column("Manager", style="cyan")
    table.add_column("Index")
    table.add_column("Exists")
    table.add_column("Documents", justify="right", style="green")
    table.add_column("Size", justify="right", style="yellow")

    for name, manager in registry.managers.items():
        connection = manager.get_connection()
        if not connection.is_reachable():
            table.add_row(name, connection.index_name, "unreachable", "-", "-")
            continue
        info = connection.get_index_info()
        table.add_row(
            name,
            info.name,
            "yes" if info.exists else "no",
            f"{info.doc_count:,}" if info.exists else "-",
            _format_bytes(info.size_bytes) if info.exists else "-",
        )

    console.print(table)
    return 0


def cmd_create(registry: ServiceRegistry, name: str) -> int:
    """인덱스 생성 (이미 있으면 건너뜀)."""
    connection = registry.manager(name).get_connection()
    if connection.index_exists():
        console.print(f"Index {connection.index_name} already exists.")
        return 0
    connection.create_index()
    console.print(f"Created index {connection.index_name}.")
    return 0


def cmd_drop(registry: ServiceRegistry, name: str, confirm: bool) -> int:
    """인덱스 삭제."""
    if not confirm:
        console.print("--confirm 플래그를 추가해야 삭제됩니다.", style="bold red")
        console.print("이 작업은 모든 데이터를 삭제합니다!")
        return 1
    connection = registry.manager(name).get_connection()
    connection.drop_index()
    console.print(f"Dropped index {connection.index_name}.")
    return 0


def cmd_recreate(registry: ServiceRegistry, name: str, confirm: bool) -> int:
    """인덱스 재생성 (drop + create)."""
    if not confirm:
        console.print("--confirm 플래그를 추가해야 재생성됩니다.", style="bold red")
        console.print("이 작업은 모든 데이터를 삭제합니다!")
        return 1
    connection = registry.manager(name).get_connection()
    connection.drop_and_create_index()
    console.print(f"Recreated index {connection.index_name}.")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="esbundle",
        description="Elasticsearch 매니저/인덱스 관리 도구",
    )
    parser.add_argument("--config", default=None, help="설정 파일 경로 (기본: $ES_BUNDLE_CONFIG)")
    subparsers = parser.add_subparsers(dest="command", help="명령어")

    def add_connection_option(sub: argparse.ArgumentParser) -> None:
        sub.add_argument(
            "--connection",
            default=DEFAULT_MANAGER,
            help=f"대상 커넥션 이름 (기본: {DEFAULT_MANAGER})",
        )

    add_connection_option(subparsers.add_parser("cache-clear", help="인덱스 캐시 비우기"))
    subparsers.add_parser("status", help="인덱스 상태 확인")
    add_connection_option(subparsers.add_parser("create", help="인덱스 생성"))

    drop_parser = subparsers.add_parser("drop", help="인덱스 삭제")
    add_connection_option(drop_parser)
    drop_parser.add_argument("--confirm", action="store_true", help="삭제 확인 (필수)")

    recreate_parser = subparsers.add_parser("recreate", help="인덱스 재생성")
    add_connection_option(recreate_parser)
    recreate_parser.add_argument("--confirm", action="store_true", help="재생성 확인 (필수)")

    return parser


def run(args: argparse.Namespace, registry: ServiceRegistry) -> int:
    """파싱된 명령 실행. 런타임 오류는 그대로 전파."""
    if args.command == "cache-clear":
        return cmd_cache_clear(registry, args.connection)
    elif args.command == "status":
        return cmd_status(registry)
    elif args.command == "create":
        return cmd_create(registry, args.connection)
    elif args.command == "drop":
        return cmd_drop(registry, args.connection, args.confirm)
    elif args.command == "recreate":
        return cmd_recreate(registry, args.connection, args.confirm)
    return 1


def main(argv: list[str] | None = None, bundle: ElasticsearchBundle | None = None) -> int:
    """CLI 진입점."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        if bundle is None:
            if args.config:
                bundle = ElasticsearchBundle.from_yaml(args.config)
            else:
                bundle = ElasticsearchBundle.from_env()
        return run(args, bundle.boot())
    except ConnectionNotFoundError as e:
        logger.error(str(e))
        console.print(f"[bold red]{e}[/bold red]")
        return 1
    except ESBundleError as e:
        logger.error(f"Configuration error: {e}")
        return 2


if __name__ == "__main__":
    sys.exit(main())
