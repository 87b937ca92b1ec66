"""Environment, mapping, hashing and template rendering utilities."""