"""
파일 및 디렉토리 처리를 담당하는 모듈입니다.
입력 디렉토리를 순회하며 Embedded SQL 소스 파일을 분석하고 결과를 출력 디렉토리에 저장합니다.
"""
import os
import json
from pathlib import Path
from typing import Dict, List, Optional

from shared_config.logger import logger, LogStage, log_step

from .annotator import HostVariableAnnotator
from .config import ScannerConfig

# 출력 파일 (요소 유형별 JSONL)
OUTPUT_KINDS = ("function", "host_variable", "sql_reference", "bare_reference")


def read_source(file_path, config: ScannerConfig) -> str:
    """
    기본 인코딩으로 읽고, 실패하면 대체 인코딩으로 다시 읽습니다.
    둘 다 실패하면 잘못된 바이트를 치환해서 읽습니다.
    """
    for encoding in (config.DEFAULT_ENCODING, config.FALLBACK_ENCODING):
        try:
            with open(file_path, 'r', encoding=encoding) as f:
                return f.read()
        except UnicodeDecodeError:
            logger.debug(f"{encoding} 디코딩 실패: {file_path}")

    logger.warning(f"인코딩 판별 실패, 치환 모드로 읽습니다: {file_path}")
    with open(file_path, 'r', encoding=config.DEFAULT_ENCODING, errors='replace') as f:
        return f.read()


def _line_of(content: str, offset: int) -> int:
    return content.count('\n', 0, offset) + 1


def process_file(
    file_path,
    config: Optional[ScannerConfig] = None,
    annotator: Optional[HostVariableAnnotator] = None
) -> Dict[str, List[dict]]:
    """
    파일 하나를 분석하여 요소 유형별 레코드를 반환합니다.

    Returns:
        {"function": [...], "host_variable": [...], "sql_reference": [...], "bare_reference": [...]}
    """
    config = config or ScannerConfig()
    annotator = annotator or HostVariableAnnotator(config)

    content = read_source(file_path, config)
    language = config.language_for(file_path)
    results = annotator.annotate(content)

    records = {kind: [] for kind in OUTPUT_KINDS}
    common = {"file": str(file_path), "language": language}

    for scope, result in results.items():
        item = dict(common)
        item.update(scope.to_dict())
        item["line_start"] = _line_of(content, scope.start)
        item["line_end"] = _line_of(content, scope.end - 1)
        item["host_variable_count"] = len(result.declared)
        records["function"].append(item)

        for var in result.declared:
            item = dict(common)
            item.update(var.to_dict())
            item["line_start"] = item["line_end"] = _line_of(content, var.declaration_pos)
            records["host_variable"].append(item)

        for kind, refs in (("sql_reference", result.sql_references),
                           ("bare_reference", result.bare_references)):
            for ref in refs:
                item = dict(common)
                item.update(ref.to_dict())
                item["function"] = scope.name
                item["line_start"] = item["line_end"] = _line_of(content, ref.offset)
                records[kind].append(item)

    return records


@log_step("디렉토리 분석")
def process_directory(input_path, output_dir, config: Optional[ScannerConfig] = None) -> List[dict]:
    """
    입력 경로(디렉토리 또는 파일)의 대상 파일을 분석하고 결과를 출력 디렉토리에 씁니다.
    결과는 요소 유형별로 분리되어 저장됩니다 (예: function.jsonl, host_variable.jsonl).

    파일 하나의 실패는 기록만 하고 다음 파일로 계속 진행합니다.

    Returns:
        파일별 요약 목록 ({"file", "language", "functions", ..., "error"})
    """
    config = config or ScannerConfig()
    annotator = HostVariableAnnotator(config)

    os.makedirs(output_dir, exist_ok=True)

    # 이번 실행의 첫 쓰기에서 파일을 비웁니다.
    for kind in OUTPUT_KINDS:
        open(os.path.join(output_dir, f"{kind}.jsonl"), 'w', encoding='utf-8').close()

    summaries = []
    for file_path in iter_target_files(input_path, config):
        summary = {"file": str(file_path), "language": config.language_for(file_path), "error": None}
        try:
            with LogStage("호스트 변수 분석", file=file_path):
                records = process_file(file_path, config, annotator)
        except (OSError, UnicodeError) as e:
            logger.error(f"파일 처리 실패 {file_path}: {e}")
            summary["error"] = str(e)
            summaries.append(summary)
            continue

        for kind, items in records.items():
            output_file_path = os.path.join(output_dir, f"{kind}.jsonl")
            with open(output_file_path, 'a', encoding='utf-8') as f:
                for item in items:
                    f.write(json.dumps(item, ensure_ascii=False) + '\n')
            summary[kind] = len(items)
        summaries.append(summary)

    return summaries


def iter_target_files(input_path, config: ScannerConfig) -> List[Path]:
    """
    입력 경로가 파일이면 그 파일만, 디렉토리면 연결된 확장자의 파일을 정렬해 반환합니다.
    """
    path = Path(input_path)
    if path.is_file():
        return [path]

    if not path.is_dir():
        raise FileNotFoundError(f"입력 경로를 찾을 수 없습니다: {input_path}")

    targets = []
    for root, dirs, files in os.walk(path):
        dirs.sort()
        for file in sorted(files):
            if config.is_target(file):
                targets.append(Path(root) / file)
    return targets
