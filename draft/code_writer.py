import logging
from pathlib import Path


logger = logging.getLogger(__name__)


def write_code_file(code, file_name, base_directory=None) -> Path:
    base_directory = Path(".") if base_directory is None else Path(base_directory)
    path = base_directory / file_name
    owning_directory = path.parent
    if not owning_directory.exists():
        owning_directory.mkdir(parents=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(code)
    logger.info("wrote %s", path)
    return path
