"""
Daily tracker subsystem.

Components:
- task_models.py: data structures (Task, RescheduleInfo, TaskKind)
- task_store.py: SQLite-backed storage + query/update helpers
- ledger.py: per-day credit/debit balance sheet (pure functions)
- views.py: day / week / month timelines over the ledger
- rescheduling.py: missed-task gate and reschedule bookkeeping
- debrief.py / debrief_scheduler.py: end-of-day summary and its polling loop
"""
