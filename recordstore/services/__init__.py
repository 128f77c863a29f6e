# Services package init
"""
RecordStore — Services Layer
=============================

Service Inventory:
    - RecordStore:   whole-file JSON persistence (record_store.py)
    - RecordService: CRUD over the loaded collection (record_service.py)

Both are plain classes wired together by main.create_app(); nothing here
depends on FastAPI, so they are tested without HTTP.
"""
