# module daniel_award.app
from daniel_award.app_setup.factory import create_app

app = create_app()
