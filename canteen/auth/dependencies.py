# auth/dependencies.py
from canteen.auth.routes import fastapi_users

# Menu upload, redemption, confirmation and reporting
get_current_admin_user = fastapi_users.current_user(active=True, superuser=True)
