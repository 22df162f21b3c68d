"""
호스트 변수 스캐너 설정 모듈

ScannerConfig 클래스를 통해 파일 읽기, 확장자 연결, 출력 동작을 설정합니다.
YAML 파일에서 설정을 읽을 수 있습니다.
"""

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Dict, Optional, Tuple

import yaml

from shared_config.logger import logger


def _default_associations() -> Dict[str, str]:
    return {
        ".sqc": "c",
        ".sqC": "cpp",
        ".sqx": "cpp",
        ".pc": "c",
    }


@dataclass
class ScannerConfig:
    """스캐너 설정"""

    # 인코딩 설정
    DEFAULT_ENCODING: str = "utf-8"
    FALLBACK_ENCODING: str = "euc-kr"

    # 확장자 -> 언어 (대소문자 구분: .sqc 는 C, .sqC 는 C++)
    FILE_ASSOCIATIONS: Dict[str, str] = field(default_factory=_default_associations)

    # 일반 코드 참조 출력 여부
    REPORT_BARE_REFERENCES: bool = True

    # 건너뛸 함수 목록
    SKIP_FUNCTIONS: Tuple[str, ...] = field(default_factory=tuple)

    def language_for(self, path) -> Optional[str]:
        """파일 확장자에 연결된 언어 (대상 파일이 아니면 None)"""
        return self.FILE_ASSOCIATIONS.get(Path(path).suffix)

    def is_target(self, path) -> bool:
        return self.language_for(path) is not None


def load_config(path: Optional[str] = None) -> ScannerConfig:
    """
    YAML 파일에서 설정을 로드합니다.

    Args:
        path: YAML 파일 경로 (None이면 기본 설정)

    Returns:
        ScannerConfig

    Raises:
        FileNotFoundError: 파일이 존재하지 않을 경우
        yaml.YAMLError: YAML 파싱 오류
        ValueError: 알 수 없는 키 또는 잘못된 값
    """
    if path is None:
        return ScannerConfig()

    file_path = Path(path)
    if not file_path.exists():
        logger.error(f"설정 파일을 찾을 수 없습니다: {path}")
        raise FileNotFoundError(f"설정 파일을 찾을 수 없습니다: {path}")

    logger.info(f"설정 파일 로드: {path}")
    with open(file_path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f)

    if data is None:
        logger.warning("빈 설정 파일입니다, 기본 설정을 사용합니다")
        return ScannerConfig()

    if not isinstance(data, dict):
        logger.error("잘못된 설정 형식: 딕셔너리가 필요합니다")
        raise ValueError("잘못된 설정 형식: 딕셔너리가 필요합니다")

    known = {f.name for f in fields(ScannerConfig)}
    values = {}
    for key, value in data.items():
        name = str(key).upper()
        if name not in known:
            logger.error(f"알 수 없는 설정 키: {key}")
            raise ValueError(f"알 수 없는 설정 키: {key}")
        values[name] = value

    if "FILE_ASSOCIATIONS" in values:
        associations = values["FILE_ASSOCIATIONS"]
        if not isinstance(associations, dict):
            raise ValueError("FILE_ASSOCIATIONS는 확장자 -> 언어 딕셔너리여야 합니다")
        values["FILE_ASSOCIATIONS"] = {str(k): str(v) for k, v in associations.items()}

    if "SKIP_FUNCTIONS" in values:
        skip = values["SKIP_FUNCTIONS"] or ()
        if isinstance(skip, str):
            skip = (skip,)
        values["SKIP_FUNCTIONS"] = tuple(str(name) for name in skip)

    if "REPORT_BARE_REFERENCES" in values and not isinstance(values["REPORT_BARE_REFERENCES"], bool):
        raise ValueError("REPORT_BARE_REFERENCES는 true/false 여야 합니다")

    return ScannerConfig(**values)
