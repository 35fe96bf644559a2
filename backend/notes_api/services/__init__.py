# Services package init
"""
Notes API: Services Layer
============================

Service Inventory:
    - NoteService: builds and executes the one SQL statement behind each
      notes endpoint and applies the exactly-one-row success rule
"""
