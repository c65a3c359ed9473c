"""
Service layer abstraction.

Each service encapsulates the operations for one domain and is built
around an explicitly passed ``MongoStore``.  Route handlers only
translate HTTP payloads into service calls.
"""
