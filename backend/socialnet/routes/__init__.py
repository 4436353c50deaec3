# Routes package init
"""
SocialNet Backend — API Routes Package
========================================

Route Inventory:
    - auth.py:    POST  /auth/register, POST /auth/login        (public)
    - users.py:   GET   /users/{id}, GET /users/{id}/friends,
                  PATCH /users/{id}/{friendId}                  (token)
    - posts.py:   POST  /posts, GET /posts, GET /posts/{userId}/posts,
                  PATCH /posts/{id}/like                        (token)
    - assets.py:  GET   /assets/{path}                          (public)
    - health.py:  GET   /health                                 (public)

Routes stay thin: extract data from the request, call a service, shape the
response. Business logic lives in services.
"""
