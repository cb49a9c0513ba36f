# Routes package init
"""
Hiring Notifier Backend — API Routes Package
=============================================

Route Inventory:
    - applications.py: POST  /api/applications              (submit + notify)
                       GET   /api/applications              (list, ?team= ?status=)
                       GET   /api/applications/stats/summary
                       GET   /api/applications/{id}
                       PATCH /api/applications/{id}/status
    - teams.py:        GET/POST        /api/teams
                       GET             /api/teams/email/status
                       GET/PUT/DELETE  /api/teams/{id}
                       POST            /api/teams/{id}/test-email
    - health.py:       GET /health, GET /

Routes stay thin: read the request, call a service, wrap the result.
"""
