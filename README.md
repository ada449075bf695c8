# sercore

Small building blocks for long-running services, and a command-line tool
that removes immediately repeated blocks of lines from a text file. It has no
third-party dependencies.

## Contents

- `sercore.logger`: `Logger` writes `[Level] timestamp: message` lines to
  stdout (`enable_console`) and/or a file (`open_file`). Messages above
  `max_level` are dropped; the default level is `LogLevel.NO`, so nothing is
  written until you raise it. Before each write the log file is cut down with
  `trim_file` once it grows past `max_size` bytes. `level_from_name` maps
  `"error"`, `"warn"`, `"info"` and `"debug"` (any case) to a `LogLevel`.
  `default_logger()` returns the process-wide instance that the other
  modules log to.
- `sercore.text.find(haystack, needle, start, end)`: the first position in
  `[start, end)` where `needle` begins, or -1. The bounds may be given in
  either order. Works on `str` and `bytes`.
- `sercore.listsort.merge_sort(items, cmp)`: a stable merge sort that takes a
  three-way comparison function and returns a new list.
- `sercore.ring.Ring`: a FIFO ring buffer that doubles its `capacity` when a
  `push` finds it full. `tighten(step)` drops elements from the head.
- `sercore.trie.DomainTrie`: maps domain names to values, with `*` wildcard
  labels such as `*.example.com`. `insert` keeps the first value stored for a
  domain and returns the existing one on a clash. The trie also has `get`,
  `remove`, `values` and `dump`.
- `sercore.table.Table`: a fixed-size hash table with one lock per bucket and
  caller-supplied comparison and hash functions. It defaults to
  `string_cmp` and `string_hash`. `put` is first-writer-wins. The table also
  has `get`, `remove`, `len()`, `map` and `to_list`.
- `sercore.timer_list.TimerList`: `Timer`s kept in order of when they are
  due. `tick()` fires the due ones, and `start(msec)` / `stop()` call `tick()`
  from a background thread. `discard_target` cancels timers by their
  argument.
- `sercore.timer_wheel.TimerWheel`: a hashed timer wheel. `add` returns a
  `TimerNode`. `delete` or `TimerNode.cancel` drop a timer lazily. `tick()`
  advances the wheel by one slot. `start()` / `stop()` tick every
  `tick_interval` ms from a background thread. `pending()` returns the number
  of live timers.
- `sercore.thread_pool.ThreadPool`: a fixed set of worker threads and a
  bounded request queue. `append` raises `PoolFullError` when the queue
  holds `max_requests`. `close()` stops the workers and drops requests that
  have not started.
- `sercore.task`:
  - `save_pid` writes `<run_dir>/<prgname>.pid`.
  - `run_supervised` runs a function in a forked child process. It restarts
    the child until it exits with status 0. It needs `os.fork`, so it works
    on POSIX only.
- `sercore.tlv`: a type-length-value codec with big-endian 16-bit id and
  length headers. You register ids with a `TlvKind` (`BUF`, `NULL`, `BYTE`,
  `WORD`, `DWORD`, `STR`) and an optional handler in a `TlvRegistry`. Then
  `new`, `encode` and `decode` work with `Tlv` records. `Tlv.execute` runs
  the handler.

## Installing

    pip install .

## Examples

Domain lookups with wildcards:

    from sercore.trie import DomainTrie

    trie = DomainTrie()
    trie.insert("www.example.com", "10.0.0.1")
    trie.insert("*.example.com", "10.0.0.2")
    trie.get("www.example.com")   # "10.0.0.1"
    trie.get("mail.example.com")  # "10.0.0.2"

A timer wheel ticked by hand:

    from sercore.timer_wheel import TimerWheel

    wheel = TimerWheel(slot_count=10, tick_interval=1000)
    fired = []
    wheel.add(3, False, fired.append, "done")
    for _ in range(3):
        wheel.tick()
    # fired == ["done"]

Encoding and decoding TLV records:

    from sercore.tlv import TlvRegistry, TlvKind

    registry = TlvRegistry(16)
    registry.register(1, TlvKind.WORD)
    data = registry.encode(1, 0x1234)   # b"\x00\x01\x00\x02\x12\x34"
    tlv, offset = registry.decode(data, 0)
    # tlv.value == 0x1234, offset == 6

## The muniq command

`muniq` finds a block of lines that is repeated straight after itself and
keeps only one copy. It tries the longest blocks first:

    muniq -o output.txt input.txt
    muniq -n 1 -m 10 -o output.txt input.txt

- `-m` sets the largest block size in lines (default 10).
- `-n` sets the smallest block size in lines (default 1).
- `-o` names the output file and is required.

The exit status is 1 when something was removed and 0 when nothing was. On a
usage or file error it is 255. A single run may leave some repeats in place,
and running it again on its output can remove more. The same logic is
available as `sercore.muniq.dedupe(data, max_repeat, min_repeat)` on bytes.

## What it does not do

The package provides only the pieces listed above. It does not include a
service process that uses them together, a control-message channel between
processes, or an event loop. Timers advance when you call `tick()` or when
the background thread started by `start()` calls it. Nothing ties them to
signals or file descriptors.