"""
CLI 인터페이스

Embedded SQL 소스(.sqc, .sqC, .sqx, .pc)의 호스트 변수 분석을 커맨드라인에서 실행합니다.
"""

import argparse
import sys
from typing import List, Optional

from rich.console import Console
from rich.table import Table

from shared_config.logger import logger, set_console_level, setup_file_logging

from .config import load_config
from .file_handler import OUTPUT_KINDS, process_directory


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='hostvar_scanner',
        description='Embedded SQL 호스트 변수 스캐너',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
예시:
  # 디렉토리 전체 분석
  python -m hostvar_scanner ./src ./output

  # 설정 파일과 상세 로그 사용
  python -m hostvar_scanner sample.sqc ./output --config scanner.yaml --verbose
"""
    )
    parser.add_argument('input', help='입력 파일 또는 디렉토리')
    parser.add_argument('output_dir', help='.jsonl 결과 출력 디렉토리')
    parser.add_argument('--config', type=str, help='YAML 설정 파일 경로')
    parser.add_argument('--verbose', action='store_true', help='DEBUG 로그 출력')
    parser.add_argument('--log-dir', type=str, help='파일 로그 디렉토리')
    return parser


def print_summary(summaries: List[dict], console: Optional[Console] = None) -> None:
    """파일별 분석 결과 요약 테이블 출력"""
    console = console or Console()
    table = Table(title=f"호스트 변수 분석 결과 ({len(summaries)}개 파일)")
    table.add_column("파일")
    table.add_column("언어")
    for kind in OUTPUT_KINDS:
        table.add_column(kind, justify="right")

    for summary in summaries:
        if summary.get("error"):
            table.add_row(summary["file"], summary.get("language") or "-",
                          f"[red]실패: {summary['error']}[/red]", "", "", "")
            continue
        table.add_row(
            summary["file"],
            summary.get("language") or "-",
            *(str(summary.get(kind, 0)) for kind in OUTPUT_KINDS),
        )

    console.print(table)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.verbose:
        set_console_level("DEBUG")
    if args.log_dir:
        setup_file_logging(args.log_dir)

    try:
        config = load_config(args.config)
        summaries = process_directory(args.input, args.output_dir, config)
    except Exception as e:
        logger.error(f"Error: {e}")
        return 1

    print_summary(summaries)
    failed = [s for s in summaries if s.get("error")]
    if failed:
        logger.warning(f"{len(failed)}개 파일 처리 실패")
    return 0


if __name__ == '__main__':
    sys.exit(main())
