import os
import stat
from typing import Callable, List, Optional, Tuple

from .errors import Forbidden, HTTPError, NotFound
from .models import DynamicTarget, ResourceMetadata, StaticTarget, Target

Validator = Callable[[ResourceMetadata], Optional[HTTPError]]


def stat_resource(path: str) -> ResourceMetadata:
    try:
        st = os.stat(path)
    except (OSError, ValueError):
        return ResourceMetadata(path=path, exists=False)

    return ResourceMetadata(
        path=path,
        exists=True,
        is_regular=stat.S_ISREG(st.st_mode),
        owner_readable=bool(st.st_mode & stat.S_IRUSR),
        owner_executable=bool(st.st_mode & stat.S_IXUSR),
        size=st.st_size,
    )


def exists(meta: ResourceMetadata) -> Optional[HTTPError]:
    if not meta.exists:
        return NotFound(meta.path)
    return None


def _forbidden_unless(check: Callable[[ResourceMetadata], bool], long_message: str) -> Validator:
    def validator(meta: ResourceMetadata) -> Optional[HTTPError]:
        if not check(meta):
            return Forbidden(meta.path, long_message)
        return None
    return validator


READ_FAILED = "Tiny couldn't read the file"
RUN_FAILED = "Tiny couldn't run the CGI program"

STATIC_VALIDATORS: List[Tuple[str, Validator]] = [
    ("exists", exists),
    ("regular_file", _forbidden_unless(lambda m: m.is_regular, READ_FAILED)),
    ("owner_readable", _forbidden_unless(lambda m: m.owner_readable, READ_FAILED)),
]

DYNAMIC_VALIDATORS: List[Tuple[str, Validator]] = [
    ("exists", exists),
    ("regular_file", _forbidden_unless(lambda m: m.is_regular, RUN_FAILED)),
    ("owner_executable", _forbidden_unless(lambda m: m.owner_executable, RUN_FAILED)),
]


def validators_for(target: Target) -> List[Tuple[str, Validator]]:
    if isinstance(target, DynamicTarget):
        return DYNAMIC_VALIDATORS
    if isinstance(target, StaticTarget):
        return STATIC_VALIDATORS
    raise TypeError(f"unknown target type: {type(target).__name__}")


def resolve(target: Target) -> ResourceMetadata:
    """
    Stat the target's path and run its validators in order.
    The first failing validator's error is raised; later ones never run.
    """
    meta = stat_resource(target.path)
    for _name, validator in validators_for(target):
        error = validator(meta)
        if error is not None:
            raise error
    return meta
