"""
Gettext tasks, for translating java projects
"""
from .tasks import XGettextTask, MsgMergeTask, MsgFmtTask, PropertiesTask, GettextAll

TASKS = [XGettextTask, MsgMergeTask, MsgFmtTask, PropertiesTask, GettextAll]
