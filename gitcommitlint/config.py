"""Configuration management for git-commit-lint."""
from pathlib import Path
from datetime import datetime
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
import tomli
import tomli_w
import os
import re

from .rules import RuleSet, create_rule_set

DEFAULT_CONFIG_FILENAME = ".gitcommitlint.toml"

class Config(BaseModel):
    """Configuration settings for git-commit-lint.

    Rule levels and options are set in ``[rules.<rule-name>]`` tables of
    the config file; the other options can also come from environment
    variables or command line arguments.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    rules: RuleSet = Field(
        default_factory=create_rule_set,
        description="Rules to validate commit messages against"
    )

    ignore_merges: bool = Field(
        default=True,
        description="Whether to skip git-generated merge commit messages"
    )

    always_log: bool = Field(
        default=False,
        description="Whether to always generate log files"
    )

    log_file: Optional[str] = Field(
        default=None,
        description="Path to log file (if not using automatic log file generation)"
    )

    @field_validator("rules", mode="before")
    @classmethod
    def build_rules(cls, value: Any) -> Any:
        if value is None:
            return create_rule_set()
        if isinstance(value, dict):
            return create_rule_set(value)
        return value

    @staticmethod
    def _sanitize_string(value: str) -> str:
        """Strip control characters and excess length from a string value."""
        if not value:
            return value

        value = re.sub(r'[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]', '', value)

        if len(value) > 1000:
            value = value[:1000]

        return value.strip()

    @staticmethod
    def _is_safe_path(path: str) -> bool:
        """Check if a path is safe (relative, no path traversal)."""
        if not path:
            return False

        if '..' in path or path.startswith('/') or '\\' in path:
            return False

        if os.path.isabs(path):
            return False

        return True

    @classmethod
    def load(cls, repo_path: Path, config_path: Optional[Path] = None) -> 'Config':
        """Load configuration from the config file.

        Args:
            repo_path: Path to the git repository
            config_path: Explicit config file, overrides the one in repo_path

        Returns:
            Config: Configuration object with values from file or defaults
        """
        config_path = config_path or repo_path / DEFAULT_CONFIG_FILENAME

        if not config_path.exists():
            return cls()

        try:
            with config_path.open('rb') as f:
                config_data = tomli.load(f)

            if isinstance(config_data.get('log_file'), str):
                config_data['log_file'] = cls._sanitize_string(config_data['log_file'])
                if not cls._is_safe_path(config_data['log_file']):
                    print(f"Warning: Unsafe log file path '{config_data['log_file']}', using default")
                    config_data['log_file'] = None

            return cls(**config_data)
        except Exception as e:
            # If there's any error reading the config, use defaults
            print(f"Warning: Error reading config file: {e}")
            return cls()

    def save(self, repo_path: Path) -> None:
        """Save configuration to the config file.

        Args:
            repo_path: Path to the git repository
        """
        config_path = repo_path / DEFAULT_CONFIG_FILENAME

        try:
            config_dict = {
                k: v for k, v in self.model_dump(exclude={'rules'}).items() if v is not None
            }
            config_dict['rules'] = self.rules.to_dict()

            if 'log_file' in config_dict and not self._is_safe_path(config_dict['log_file']):
                print(f"Warning: Unsafe log file path '{config_dict['log_file']}', not saving")
                del config_dict['log_file']

            with config_path.open('wb') as f:
                tomli_w.dump(config_dict, f)
        except OSError as e:
            print(f"Error saving config file: {e}")

    def get_log_file(self) -> Optional[Path]:
        """Get the path to the log file.

        If always_log is True, generates a timestamped log file name.
        Otherwise, returns the configured log_file path if set.

        Returns:
            Optional[Path]: Path to the log file, or None if logging is disabled
        """
        if self.always_log:
            timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
            return Path(f"gcl_log-{timestamp}.log")
        elif self.log_file:
            if self._is_safe_path(self.log_file):
                return Path(self.log_file)
            else:
                print(f"Warning: Unsafe log file path '{self.log_file}', using default")
                return None
        return None

    def __init__(self, **data):
        """Initialize config with environment variable support."""
        env_data = {}

        env_mapping = {
            'GIT_COMMIT_LINT_IGNORE_MERGES': 'ignore_merges',
            'GIT_COMMIT_LINT_ALWAYS_LOG': 'always_log',
            'GIT_COMMIT_LINT_LOG_FILE': 'log_file',
        }

        for env_var, field_name in env_mapping.items():
            if env_var in os.environ:
                value = os.environ[env_var]

                if field_name == 'log_file':
                    value = self._sanitize_string(value)

                if field_name in ['ignore_merges', 'always_log']:
                    value = value.lower() in ['true', '1', 'yes', 'on']

                env_data[field_name] = value

        merged_data = {**env_data, **data}

        super().__init__(**merged_data)
