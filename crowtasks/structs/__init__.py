"""

"""
from .file_change import FileChange
from .logger_spec import LoggerSpec
from .project_spec import ProjectSpec
