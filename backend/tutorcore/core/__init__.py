"""
Core package: the TutorCore orchestration façade.

Usage:
    from tutorcore.core import TutorCore
    core = TutorCore.from_profile()
    session_id = await core.create_session("student-1")
    result = await core.process_message(session_id, "Explain how gears work")
"""

from tutorcore.core.orchestrator import TutorCore

__all__ = ["TutorCore"]
