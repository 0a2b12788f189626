"""Records System package.

Users, sales records and employees, each a feature module (model, kind,
service, MySQL mapping, Flask controller) on top of the shared engine
(filter, aggregation and lifecycle).
"""
