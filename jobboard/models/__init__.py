# Models package
from jobboard.models.user import User
from jobboard.models.job import Job
from jobboard.models.application import Application
from jobboard.models.notification import Notification, JobRef, ApplicationRef
from jobboard.models.message import Message
