import pytest

from dvrouter.config import RouterConfig
from dvrouter.transport import TransportError, make_transport
from dvrouter.transport.redis_transport import RedisTransport
from dvrouter.transport.socket_transport import SocketTransport


def test_socket_is_the_default():
    t = make_transport(RouterConfig(router_id=1, host="relay", port=4000))
    assert isinstance(t, SocketTransport)
    assert (t.host, t.port) == ("relay", 4000)


def test_redis_channels_follow_prefix():
    t = make_transport(RouterConfig(router_id=2, transport="redis", channel_prefix="lab"))
    assert isinstance(t, RedisTransport)
    assert (t.inbox, t.relay_channel) == ("lab.2", "lab.relay")


def test_xmpp_needs_credentials():
    with pytest.raises(ValueError):
        make_transport(RouterConfig(router_id=0, transport="xmpp"))


def test_xmpp_transport_is_built_without_connecting():
    pytest.importorskip("slixmpp")
    from dvrouter.transport.xmpp_transport import XMPPTransport
    t = make_transport(RouterConfig(router_id=0, transport="xmpp", host="xmpp.local", port=5222,
                                    jid="r0@xmpp.local", password="pw", relay_jid="relay@xmpp.local"))
    assert isinstance(t, XMPPTransport)
    assert t.relay_jid == "relay@xmpp.local"
    with pytest.raises(TransportError):
        t.receive()


def test_unknown_transport():
    with pytest.raises(ValueError):
        make_transport(RouterConfig(router_id=0, transport="carrier-pigeon"))
