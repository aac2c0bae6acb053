"""
Orchestration: sessions, intent classification, planning and plan execution.

Import the modules directly (tutorcore.orchestration.session, ...). Agent
modules import tutorcore.orchestration.actions at registration time, so this
package re-exports nothing.
"""
