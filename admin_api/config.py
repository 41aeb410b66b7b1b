"""Admin console configuration: regions, managed tables and path templates."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict

PROJECT_ROOT = Path(__file__).resolve().parent.parent

STAGES = ("dev", "prod")


@dataclass(frozen=True)
class TableConfig:
    """A table managed by the console."""

    file: str
    ssm_param: str


@dataclass(frozen=True)
class AdminConfig:
    """Everything the admin operations need to locate resources."""

    project_root: Path = PROJECT_ROOT
    region: str = "eu-central-1"
    tables: Dict[str, TableConfig] = field(
        default_factory=lambda: {
            "developer": TableConfig(file="developer.json", ssm_param="DEVELOPER_TABLE_NAME"),
            "projects": TableConfig(file="projects.json", ssm_param="PROJECTS_TABLE_NAME"),
            "recruiters": TableConfig(file="recruiters.json", ssm_param="RECRUITER_PROFILES_TABLE_NAME"),
        }
    )
    ssm_template: str = "/portfolio/{stage}/{paramName}"
    data_template: str = "data/{stage}"
    state_file: str = "data/.admin-state.json"
    cognito_user_pool_param: str = "COGNITO_USER_POOL_ID"
    data_bucket_param: str = "DATA_BUCKET_NAME"
    link_generator_template: str = "link-generator-{stage}"

    def ssm_path(self, stage: str, param_name: str) -> str:
        return self.ssm_template.replace("{stage}", stage).replace("{paramName}", param_name)

    def data_dir(self, stage: str) -> Path:
        return self.project_root / self.data_template.replace("{stage}", stage)

    @property
    def state_path(self) -> Path:
        return self.project_root / self.state_file


ADMIN_CONFIG = AdminConfig()
