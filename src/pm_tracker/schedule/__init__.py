"""
Scheduling engine.

Components:
- dates.py: "YYYY-MM-DD" parsing/formatting and day differences
- frequency.py: frequency codes -> next due date, cycle length, labels
- status.py: pending / overdue / due-soon / ok classification
"""
