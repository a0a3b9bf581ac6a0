"""Example: drive the service layer directly (no Flask).

Controllers are a thin layer; the approval rules live in the services.
"""

from src.outpass_system.outpass_system.container import build_container
from src.outpass_system.outpass_system.core.enums import Role
from src.outpass_system.outpass_system.outpasses.model import Actor
from src.outpass_system.outpass_system.outpasses.service import NewOutpass


def main():
    container = build_container(storage_backend="memory")
    parent = Actor(actor_id="4", role=Role.PARENT)
    mentor = Actor(actor_id="2", role=Role.MENTOR)
    warden = Actor(actor_id="3", role=Role.WARDEN)

    outpass = container.outpass_service.submit(
        NewOutpass(
            student_name="Student Name",
            student_id="STU001",
            guardian_name="Parent User",
            guardian_number="9876543210",
            out_date="2026-10-19",
            in_date="2026-10-21",
            reason="Family function",
        ),
        requester=parent,
    )
    print(outpass.request_id, outpass.day_type.value, outpass.status.value)

    container.outpass_service.approve(outpass.request_id, actor=mentor, remarks="ok")
    container.outpass_service.approve(outpass.request_id, actor=warden)

    for row in container.outpass_queries.history_for(parent):
        print(row.request_id, row.status.value, row.mentor_decision, row.warden_decision)
    print(container.outpass_queries.statistics_for(parent))


if __name__ == "__main__":
    main()
