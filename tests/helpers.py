import io

from market_app.models import Upload

PASSWORD = "s3cret-pass"


def image(size=1024, name="thumb.png"):
    return Upload(filename=name, content=b"\x89PNG" + b"0" * max(size - 4, 0))


def multipart_file(size=1024, name="thumb.png"):
    return (io.BytesIO(b"\x89PNG" + b"0" * max(size - 4, 0)), name)


def register(services, email="vendor@example.com", name="Ada", shop_name="Ada's Shop",
             contact=5551234, password=PASSWORD):
    return services.accounts.register(
        name=name,
        shop_name=shop_name,
        location="Lagos",
        contact=contact,
        email=email,
        password=password,
        password2=password,
    )
