from msfeedback import create_app
from msfeedback.services.seed_service import seed_defaults

app = create_app()

with app.app_context():
    result = seed_defaults()
    system = result["system"]
    print(f"External system: {system.name} (id={system.id})")
    print(f"Default API key {'created' if result['created_key'] else 'already present'}")
    print(f"Categories added: {result['categories']}")
    print("Seed completed.")
