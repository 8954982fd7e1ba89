"""Routing — path matching, the route table, and the navigation controller.

Routes are registered during setup, resolved exact-first then in
registration order, and mounted through a view transition that keeps the
new view where the old one was.
"""
