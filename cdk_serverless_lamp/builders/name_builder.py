from typing import Optional

from cdk_serverless_lamp.constants.project_config import ProjectConfig


class NameBuilder:
    '''Builds physical resource names as <project>-<environment>-<service>-<name>'''
    def __init__(self, project_config: ProjectConfig):
        self.PROJECT_CONFIG = project_config

    def build(self, service: str, name: Optional[str] = None) -> str:
        sep = self.PROJECT_CONFIG.separator
        parts = [self.PROJECT_CONFIG.project_name, self.PROJECT_CONFIG.environment.value, service]
        if name:
            parts.append(name)
        return sep.join(part.lower() for part in parts)
