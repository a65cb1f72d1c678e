"""
Résumé Data Loader

Reads the JSON data file that every build starts from. The parsed document is
returned as-is: shape checking happens when the templating context builds the
typed ResumeData record.
"""

import asyncio
import json
from pathlib import Path
from typing import Any, Dict, Union

from vitae.contexts.intake.exceptions import DataLoadError
from vitae.contexts.intake.logger import log_load_result, log_load_start


def read_resume_data(data_path: Union[str, Path]) -> Dict[str, Any]:
    """
    Read and parse the résumé data file.

    Args:
        data_path: Path to the JSON data file

    Returns:
        Parsed JSON document (top-level object)

    Raises:
        DataLoadError: If the file cannot be read, is not valid JSON, or its
            top-level value is not an object
    """
    data_path = Path(data_path)
    log_load_start(data_path)

    try:
        content = data_path.read_text(encoding="utf-8")
    except OSError as e:
        error = DataLoadError("Failed to read resume data file", path=data_path, original_error=e)
        log_load_result(data_path, success=False, error=error)
        raise error from e
    except UnicodeDecodeError as e:
        error = DataLoadError("Resume data file is not valid UTF-8", path=data_path, original_error=e)
        log_load_result(data_path, success=False, error=error)
        raise error from e

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        error = DataLoadError("Resume data file is not valid JSON", path=data_path, original_error=e)
        log_load_result(data_path, success=False, error=error)
        raise error from e

    if not isinstance(data, dict):
        error = DataLoadError(
            f"Resume data must be a JSON object, got {type(data).__name__}", path=data_path
        )
        log_load_result(data_path, success=False, error=error)
        raise error

    log_load_result(data_path, success=True)
    return data


async def load_resume_data(data_path: Union[str, Path]) -> Dict[str, Any]:
    """Async variant of read_resume_data(); file access runs off the event loop."""
    return await asyncio.to_thread(read_resume_data, data_path)
