from fastmcp import FastMCP

from ..client import ClientGetter
from .acs import register_acs_tools
from .admin import register_admin_tools
from .ai import register_ai_tools
from .application import register_application_tools
from .approval import register_approval_tools
from .attendance import register_attendance_tools
from .bitable import register_bitable_tools
from .calendar import register_calendar_tools
from .contact import register_contact_tools
from .corehr import register_corehr_tools
from .docs import register_docs_tools
from .drive import register_drive_tools
from .ehr import register_ehr_tools
from .helpdesk import register_helpdesk_tools
from .hire import register_hire_tools
from .im import register_im_tools
from .lingo import register_lingo_tools
from .mail import register_mail_tools
from .okr import register_okr_tools
from .personal_settings import register_personal_settings_tools
from .search import register_search_tools
from .sheets import register_sheets_tools
from .task import register_task_tools
from .vc import register_vc_tools
from .wiki import register_wiki_tools
from .workplace import register_workplace_tools

REGISTRARS = [
    register_im_tools,
    register_docs_tools,
    register_drive_tools,
    register_bitable_tools,
    register_wiki_tools,
    register_contact_tools,
    register_calendar_tools,
    register_approval_tools,
    register_task_tools,
    register_sheets_tools,
    register_search_tools,
    register_mail_tools,
    register_vc_tools,
    register_attendance_tools,
    register_helpdesk_tools,
    register_lingo_tools,
    register_hire_tools,
    register_okr_tools,
    register_corehr_tools,
    register_ehr_tools,
    register_admin_tools,
    register_application_tools,
    register_acs_tools,
    register_ai_tools,
    register_personal_settings_tools,
    register_workplace_tools,
]


def register_all(mcp: FastMCP, get_client: ClientGetter) -> None:
    for register in REGISTRARS:
        register(mcp, get_client)


__all__ = ["REGISTRARS", "register_all"]
