"""teamtodo - todo lifecycle engine (recurrence, reminders, notifications, activity)."""
