# shared fixtures: golden handshake vectors, fake redis, fake clock
import pytest


def _sequence_int(mul: int, add: int, length: int = 128) -> int:
    return int.from_bytes(bytes((i * mul + add) % 256 for i in range(length)), "big")


class Golden:
    # produced by an independent implementation of the same handshake
    POOL_NAME = "NqkuZcXQY"
    USER_ID_FOR_SRP = "a1b2c3d4-0000-4000-8000-feedfacecafe"
    PASSWORD = "correct horse battery staple"
    SALT_HEX = "9f3c2a71e0d45b86c1a2e3f405162738"
    SECRET_BLOCK = "b3BhcXVlLXNlY3JldC1ibG9jay1tYXRlcmlhbC1mb3ItZ29sZGVuLXZlY3Rvci10ZXN0cw=="
    TIMESTAMP = "Thu Jan 1 00:00:00 UTC 2026"

    SMALL_A = _sequence_int(37, 11)
    SMALL_B = _sequence_int(53, 101) # server ephemeral secret used to build B

    K_HEX = "538282c4354742d7cbbde2359fcf67f9f5b3a6b08791e5011b43b8a5b66d9ee6"
    A_HEX = (
        "562d809279d9b37ac8273afc5019486ac88b1a5b385cfc0ccbd95bb332cb9cf1653990e402823f25095dc743a3467809"
        "bd21e5d3ce48e496e043a9e3b93759b4a613d426a1e089652fea31aa0cfe27edba22b10078677601874b26c78d7e81a5"
        "5ced83f3314e576c2dffb4e0f26bbbb36ad2833ec99476e7edf1cc89bc8570aa897649a6a6c4df84944a4602203f95c6"
        "2eea907cd15a2de8d34077abae68549bbe408a5b0a54f4986c15ea6b637799fa4ec8d92f11a942d8c4520a334ca75cca"
        "991aed533bebabfd428bd56ffcf11338e753e3e3cfaa4568413529a574ee58280c885b8aecd8b048e551a86ba965e12e"
        "514705a053dfe3906e14429a4a1037ede805540e7adef34be24ea5a24165826de103a7d18e46145426303e55e36e9def"
        "4192b244d0c0710e9cc8dab89280b72aa8adcbf61cf3cfa69a97cf1301c26a96c630c0cebb73d190999405e42d25ac7c"
        "1956f4b19a7ff36b22cc586b272238bb1960dc246687b13fa789d94289f9fb7b4df577ef430166e185ff72ac6f8e04b4"
    )
    B_HEX = (
        "009623cc536dd935eab61206f7ce89003b8bca36f23f602933f4d662c9929b20f84fe18b0986229fe7f1b40cca652e9c"
        "0fd0198398cff13572fdb7928c6f722d4fba04aa60bbac1aa244520aa7715f0eb9579accc05f3c861e66efa74d37bd12"
        "ab1271c9411d71d4c7daa0d94858f75d0662515c3b7bdd068e9cb80c69d92db44c619c8a15c7cc636d394f7b976f670d"
        "b4c9f8c083d98f605a331c2ac2211dc57881c56fc2fb48e7dd4bef87daeaf5b59c1dad1a0c444ca99747c9211f353f19"
        "a8f3cc3a2b80d342a7ca1518b75b4d7730a318573e92fe5e2564eac3c1d1bad99259b1fb20126a57e14729eb3eb6b8d6"
        "aa966a03000a07999e4a0a940e2132f37c8a58b6f3f31d149e9e9cef00b13b91cb7a8d45605069f7a77f68e2a8694d4f"
        "7a3f974ae68274943dc33cc18d35c8d949300e55442b1cb4d421863268ce0a6a6a0a889f903aa3a1fefe4f60e65e8601"
        "14dae5e6c075be39690985119f02e6da3e4c94e8c09912ebabb3b8626716a78fb70b1929ce72225205b7116c55073be3"
        "65"
    )
    U_HEX = "00b2251943cbca4f38680374a55184a66a8875ad222e51d6d6eba13c02f94b09f4"
    X_HEX = "00d683498cc7414f0fc58871777b28c12c4ab59faab01f0b14c5318301e191029e"
    S_HEX = (
        "5bc7369cd9fb65d7cf013fc26b27cd8c6828bfb06a578b5d017a905b45817dda6bac6f8e9114429d9c33879ed9768deb"
        "0d5c87542db756ae83a579392460cd7c11d201198b27bb04b3b2c1f32ee06aec94029a9bf0457f9630f903d7efd82523"
        "7529842ecd0eaf977588601f96b7ec79fa1c1e350112929bd105d295681fb9cc61f5f719a88b2ea8af2b8e19d6968564"
        "bf148472a3e59d9216b637a758c63f5edcae1adf881a4dcd7e0864b0c952a8f5fbab1952a21e741af904165d4ac05c0d"
        "860083c41e89630ddd9893aeacabeb6bb7bed07848e57183455af9fb73f0adbc5926afa3f8fef0e9b5cdbc650977dd26"
        "8b7af5b62ddf4e4be8f561bf022ad4d23c490e0a798ed322f59d7426f0a7050850d5361a838521e7f1b4babeb69ee832"
        "b182f1ed3591012040e0581a78037cf5118a45a0278ab2a06d2ba000a0a00c2d05d2189147d6c25199e82ebef903b6b8"
        "c7ad79f03ccae060ce5087ee6135ca24ec86bf3ac237ce1ee884e4d2131978cba90ca347e2440b5f14c39e65618938b5"
    )
    IDENTITY_HASH_HEX = "f85bae5b0799d7a98c0ee7221375e6ec743a93cce6e2fa332c1a5588ee6334ea"
    SIGNING_KEY_HEX = "bcb24c74b4667ab2dbbf8d0108f28f44"
    SIGNATURE = "1BOW75XNH6woaiEL4qCjz5UWnWpM+efSGtu03iJGsb8="


@pytest.fixture
def golden():
    return Golden


class FakeRedis:
    def __init__(self):
        self.store = {}
        self.ttls = {}
        self.closed = False

    def setex(self, key, time_sec, value):
        self.store[key] = value # no actual expiration
        self.ttls[key] = time_sec

    def get(self, key):
        return self.store.get(key)

    def close(self):
        self.closed = True


@pytest.fixture
def fake_redis():
    return FakeRedis()


class FakeClock:
    def __init__(self, now_ms: int = 1_767_225_600_000): # 2026-01-01T00:00:00Z
        self.now_ms = now_ms

    def __call__(self) -> int:
        return self.now_ms

    def advance(self, ms: int):
        self.now_ms += ms


@pytest.fixture
def clock():
    return FakeClock()
