"""Lesson Balance package.

Credit allocation and balance reconciliation for lesson passes, organized by
feature modules (lessons, attendance, subscriptions, balance, revenue, ...)
with thin service/repository layers around a pure allocation engine.
"""
