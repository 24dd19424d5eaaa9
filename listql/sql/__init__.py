from .builders import ListQueryBuilder, PostArguments

__all__ = ['ListQueryBuilder', 'PostArguments']
