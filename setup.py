import os
import re
from datetime import datetime
from pathlib import Path

from packaging.version import Version
from setuptools import setup
from setuptools_git_versioning import count_since, get_branch, get_sha, get_tags

BASE_VERSION = Version("0.1.0")
TAG_VERSION_PATTERN = re.compile(r"^v(\d+\.\d+\.\d+)$")
ROOT = Path(__file__).parent


def get_version_metadata() -> tuple[str, dict[str, str]]:
    """
    Compute the package version from the latest ``vX.Y.Z`` tag not newer than
    BASE_VERSION and the build type in ``TYPECONVERTERS_BUILD_TYPE``:

    - release: BASE_VERSION, or ``{last_tag}.post{iteration}`` once it is tagged
    - candidate: ``{BASE_VERSION}.rc{iteration}``
    - nightly / alpha: ``{BASE_VERSION}.a{iteration}``
    - anything else: ``{BASE_VERSION}.dev{iteration}``

    The iteration comes from ``TYPECONVERTERS_BUILD_ITERATION``, else the number of
    commits since the last tag, else 0.

    :returns: The version string and the build metadata written to version.py
    """
    tagged_versions = [
        (Version(match.group(1)), tag)
        for tag in get_tags(root=ROOT)
        if (match := TAG_VERSION_PATTERN.match(tag))
        and Version(match.group(1)) <= BASE_VERSION
    ]
    last_version, last_tag = max(
        tagged_versions, key=lambda tagged: tagged[0], default=(None, None)
    )
    commits_since_tag = (
        count_since(last_tag + "^{commit}", root=ROOT) if last_tag else None
    )

    build_type = os.getenv("TYPECONVERTERS_BUILD_TYPE", "dev").lower()
    build_iteration = (
        os.getenv("TYPECONVERTERS_BUILD_ITERATION") or commits_since_tag or 0
    )

    if build_type == "release":
        version = (
            str(BASE_VERSION)
            if not last_version or BASE_VERSION > last_version
            else f"{last_version}.post{build_iteration}"
        )
    elif build_type == "candidate":
        version = f"{BASE_VERSION}.rc{build_iteration}"
    elif build_type in ("nightly", "alpha"):
        version = f"{BASE_VERSION}.a{build_iteration}"
    else:
        version = f"{BASE_VERSION}.dev{build_iteration}"

    metadata = {
        "version": version,
        "base_version": str(BASE_VERSION),
        "commit": get_sha(),
        "branch": get_branch(),
        "build_type": build_type,
        "build_iteration": build_iteration,
        "build_date": datetime.now().strftime("%Y-%m-%d"),
    }

    return version, {key: f'"{value}"' for key, value in metadata.items()}


def write_module_version() -> str:
    """
    Write version.txt and version.py into src/typeconverters.

    :returns: The path to the version.txt file
    """
    version, metadata = get_version_metadata()
    module_path = ROOT / "src" / "typeconverters"
    version_path = module_path / "version.txt"

    version_path.write_text(version)
    (module_path / "version.py").write_text(
        "".join(f"{key} = {value}\n" for key, value in metadata.items())
    )

    return str(version_path)


setup(
    setuptools_git_versioning={
        "enabled": True,
        "version_file": write_module_version(),
    }
)
