from os import pathsep
from pathlib import Path

from ..exceptions import (
    ERROR_ENV_NOT_SET,
    ERROR_ENV_FILE_MISSING,
    ERROR_ENV_DIRECTORY_MISSING,
)
from ..models import FailureReason, VariableKind
from . import BaseCheckTask


class CheckTask(BaseCheckTask):
    def run(self):
        for variable in self._configuration.environment:
            value = self._environ.get(variable.name, "")
            if not value:
                self.error(
                    ERROR_ENV_NOT_SET.format(name=variable.name),
                    FailureReason.ENVIRONMENT,
                )
                continue
            if variable.kind == VariableKind.FILE and not Path(value).is_file():
                self.error(
                    ERROR_ENV_FILE_MISSING.format(name=variable.name, value=value),
                    FailureReason.ENVIRONMENT,
                )
                continue
            if variable.kind == VariableKind.DIRECTORY and not Path(value).is_dir():
                self.error(
                    ERROR_ENV_DIRECTORY_MISSING.format(name=variable.name, value=value),
                    FailureReason.ENVIRONMENT,
                )
                continue
            self.passed(f"{variable.name}: {value}")
            if variable.kind == VariableKind.SEARCH_PATH:
                for entry in value.split(pathsep):
                    if entry and not Path(entry).is_dir():
                        self.warn(f"{variable.name} entry does not exist: {entry}")
