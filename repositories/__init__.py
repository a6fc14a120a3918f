"""
repositories/ - Data Access Layer
==================================
Each repository encapsulates the SQL for one table.
The budget engine never imports this layer; stores receive a persistence
callback bound to a repository instead.
"""
