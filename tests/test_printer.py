from dhcpleases.grammar.parser import parse_record
from dhcpleases.grammar.printer import is_canonical, print_record
from dhcpleases.record import OnBlock, PeerState, Record
from dhcpleases.scanner import scan_declarations

FULL_LEASE = r"""lease 192.168.254.55 {
  starts 3 2007/08/15 11:34:58;
  ends 3 2007/08/15 11:44:58;
  tstp 3 2007/08/15 11:49:58;
  tsfp 2 2007/08/14 21:24:19;
  atsfp 2 2007/08/14 21:24:19;
  cltt 3 2007/08/15 11:34:58;
  binding state active;
  next binding state expired;
  dynamic-bootp;
  hardware ethernet 00:11:85:5d:4e:11;
  uid "\001\000\021\205]Nh";
  abandoned;
  deleted;
  option agent.circuit-id "port-7";
  option agent.remote-id 00:11:22:33:44:55;
  set ddns-fwd-name = "blah.example.com";
  set ddns-rev-name = "55.254.168.192.in-addr.arpa";
  on expiry|release { set ddns-fwd-name = ""; }
  client-hostname "blah";
}
"""

FAILOVER = """
failover peer "dhcp-peer" state {
  my state communications-interrupted at 2 2007/08/14 21:10:00;
  partner state normal at 2 2007/08/14 20:51:22;
  mclt 3600;
}
"""


def _roundtrip(text: str) -> str:
    return print_record(parse_record(scan_declarations(text.splitlines())[0]))


def test_simple_lease_prints_byte_for_byte():
    text = (
        "lease 192.168.254.55 {\n"
        "  starts 3 2007/08/15 11:34:58;\n"
        "  ends 3 2007/08/15 11:44:58;\n"
        "}\n"
    )
    assert _roundtrip(text) == text


def test_full_lease_round_trip():
    assert _roundtrip(FULL_LEASE) == FULL_LEASE


def test_failover_round_trip_keeps_leading_blank_line():
    assert _roundtrip(FAILOVER) == FAILOVER
    bare = FAILOVER.replace('"dhcp-peer"', "dhcp-peer")
    assert _roundtrip(bare) == bare


def test_host_and_group_round_trip():
    host = (
        "host printer {\n"
        "  dynamic;\n"
        "  hardware ethernet 00:aa:bb:cc:dd:ee;\n"
        '  uid "\\001\\000";\n'
        "  fixed-address 10.0.0.5;\n"
        "  bootp;\n"
        "  reserved;\n"
        "}\n"
    )
    assert _roundtrip(host) == host
    group = "group office {\n}\n"
    assert _roundtrip(group) == group


def test_out_of_order_statements_are_reordered_and_stable():
    text = (
        "lease 10.0.0.9 {\n"
        '  client-hostname "laptop";\n'
        "  binding state free;\n"
        "  starts 1 2008/02/04 13:46:55;\n"
        "}\n"
    )
    once = _roundtrip(text)
    assert once == (
        "lease 10.0.0.9 {\n"
        "  starts 1 2008/02/04 13:46:55;\n"
        "  binding state free;\n"
        '  client-hostname "laptop";\n'
        "}\n"
    )
    assert _roundtrip(once) == once


def test_absent_flags_are_not_printed():
    text = _roundtrip("lease 10.0.0.1 {\n  binding state free;\n}\n")
    for keyword in ("abandoned", "deleted", "dynamic", "bootp", "reserved"):
        assert keyword not in text


def test_abandoned_does_not_imply_deleted():
    record = Record(type="lease", name="10.0.0.1", ip_address="10.0.0.1", abandoned=True)
    assert print_record(record) == "lease 10.0.0.1 {\n  abandoned;\n}\n"
    record = Record(type="lease", name="10.0.0.1", ip_address="10.0.0.1", deleted=True)
    assert print_record(record) == "lease 10.0.0.1 {\n  deleted;\n}\n"


def test_constructed_failover_record_defaults_to_quoted_name():
    record = Record(
        type="failover-state",
        name="dhcp-peer",
        my_state=PeerState("normal", "2 2007/08/14 21:10:00"),
        mclt="3600",
    )
    assert print_record(record) == (
        '\nfailover peer "dhcp-peer" state {\n'
        "  my state normal at 2 2007/08/14 21:10:00;\n"
        "  mclt 3600;\n"
        "}\n"
    )


def test_on_block_without_statements():
    record = Record(type="lease", name="10.0.0.1", on=OnBlock(events=["commit"]))
    printed = print_record(record)
    assert "  on commit { }\n" in printed
    assert _roundtrip(printed) == printed


def test_is_canonical():
    declarations = scan_declarations(FULL_LEASE.splitlines())
    assert is_canonical(declarations[0])
    shuffled = scan_declarations(
        ["lease 10.0.0.1 {", "binding state free;", "starts 3 2007/08/15 11:34:58;", "}"]
    )
    assert not is_canonical(shuffled[0])
