from .answerhub import AnswerHubProvider
from .consul import ConsulProvider
from .github import GitHubProvider
from .slack import SlackProvider
from .trello import TrelloProvider

__all__ = [
    "AnswerHubProvider",
    "ConsulProvider",
    "GitHubProvider",
    "SlackProvider",
    "TrelloProvider",
]
