"""AVD template manager package.

Holds the domain model, use cases, persistence layer and HTTP interface of
the Azure Virtual Desktop template administration API.
"""
