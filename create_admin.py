import os
from msfeedback import create_app
from msfeedback.extensions import db
from msfeedback.models.user import User
from msfeedback.utils.auth import hash_password
from msfeedback.utils.enums import UserStatus

app = create_app()

with app.app_context():
    db.create_all()

    admin_username = os.getenv("ADMIN_USERNAME", "admin")
    admin_email = os.getenv("ADMIN_EMAIL", "admin@example.com")
    admin_user = User.query.filter((User.username == admin_username) | (User.email == admin_email)).first()
    if not admin_user:
        admin_user = User(
            username=admin_username,
            email=admin_email,
            password=hash_password(os.getenv("ADMIN_PASSWORD", "adminpass")),
            first_name="Admin",
            last_name="User",
            status=UserStatus.ACTIVE.value,
            is_email_verified=True,
        )
        db.session.add(admin_user)
        db.session.commit()
        print(f"Created admin user {admin_username}")
    else:
        print("Admin user already exists")
