# Services package init
"""
SocialNet Backend — Services Layer
====================================

What:  Business logic layer sitting between routes (HTTP) and the database.
How:   Services accept validated schemas or plain values, apply the rules,
       and return ORM objects or response schemas. Routes receive them
       through FastAPI dependency injection (see socialnet.dependencies).

Service Inventory:
    - UserStore:    Persistence boundary for users (bounded by a timeout)
    - AuthService:  Registration and login
    - UserService:  Profile reads and the symmetric friend toggle
    - PostService:  Feed, post creation and likes
    - FileService:  Upload validation, storage, cleanup and lookup
"""
