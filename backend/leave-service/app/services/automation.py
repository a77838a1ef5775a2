import asyncio
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from app.core.config import settings
from app.core.errors import AutomationLaunchFailed, AutomationNotFound

logger = logging.getLogger(__name__)

AUTOMATION_DIR_NAME = "LeaveAutomation"


def candidate_dirs(root: Path) -> List[Path]:
    return [
        (root / ".." / AUTOMATION_DIR_NAME).resolve(),
        (root / AUTOMATION_DIR_NAME).resolve(),
        (root / ".." / ".." / AUTOMATION_DIR_NAME).resolve(),
    ]


def find_automation_dir(
    root: Path, configured: Optional[str] = None
) -> Path:
    """
    자동화 프로젝트 디렉터리 탐색.
    AUTOMATION_DIR이 설정돼 있으면 그 경로만 보고, 아니면 작업 디렉터리 기준 후보를 순서대로 확인.
    """
    candidates = [Path(configured)] if configured else candidate_dirs(root)
    for path in candidates:
        if path.is_dir():
            logger.info("Found automation directory at %s", path)
            return path
    raise AutomationNotFound(searched_paths=candidates)


def opener_commands(target: Path, platform: str = sys.platform) -> List[List[str]]:
    """
    기본 프로그램(UiPath Studio/Robot)으로 파일을 여는 명령. 첫 번째가 실패하면 다음 것을 시도.
    """
    if platform == "win32":
        return [
            ["cmd", "/c", "start", "", str(target)],
            ["explorer", str(target)],
        ]
    return [
        ["xdg-open", str(target)],
        ["open", str(target)],
    ]


async def _run(command: Sequence[str], cwd: Path) -> str:
    process = await asyncio.create_subprocess_exec(
        *command,
        cwd=str(cwd),
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )
    stdout, stderr = await process.communicate()
    if process.returncode != 0:
        raise RuntimeError(
            stderr.decode(errors="replace").strip()
            or f"exit status {process.returncode}"
        )
    return stdout.decode(errors="replace").strip()


async def trigger_automation(root: Optional[Path] = None) -> Dict[str, Any]:
    automation_dir = find_automation_dir(root or Path.cwd(), settings.AUTOMATION_DIR)

    entrypoint = automation_dir / settings.AUTOMATION_ENTRYPOINT
    if not entrypoint.is_file():
        raise AutomationNotFound(
            f"Automation file {settings.AUTOMATION_ENTRYPOINT} not found at {entrypoint}"
        )

    attempts: Dict[str, str] = {}
    for index, command in enumerate(opener_commands(entrypoint)):
        logger.info("Executing automation command: %s", " ".join(command))
        try:
            output = await _run(command, automation_dir)
        except (OSError, RuntimeError) as exc:
            logger.warning("Automation command %s failed: %s", command[0], exc)
            attempts[command[0]] = str(exc)
            continue

        message = "Automation triggered successfully"
        if index > 0:
            message += " using fallback method"
        logger.info(message)
        return {
            "success": True,
            "message": message,
            "output": output or "Automation launched",
        }

    logger.error("All attempts to execute automation failed: %s", attempts)
    raise AutomationLaunchFailed(attempts)
