"""Operations that need a logged-in session – posts, deletions, cached lists."""

from diaspora_api.resources.lists import LIST_KINDS, get_list
from diaspora_api.resources.posts import delete, normalise_aspects, post

__all__ = ["post", "delete", "normalise_aspects", "get_list", "LIST_KINDS"]
