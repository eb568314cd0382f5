"""Driver-code injection.

Users submit LeetCode-style solutions: a bare function or a ``Solution`` class
with no ``main``.  Before running one against test cases we wrap it in a small
per-language driver that reads one argument per non-blank stdin line (JSON,
falling back to the raw text), calls the entry point and prints the return
value as compact JSON.

Entry points are found with regular expressions, so this is best effort: when
nothing recognisable is found the source is returned unchanged and runs as a
plain program.
"""

import re
from string import Template

CONTROL_KEYWORDS = {"if", "for", "while", "switch", "catch", "return", "function", "else", "do", "sizeof"}


def _split_params(params: str) -> list[str]:
    """Split a parameter list on top-level commas (ignoring ``<>``/``[]``/``()``)."""
    parts: list[str] = []
    depth = 0
    current = ""
    for ch in params:
        if ch in "<[(":
            depth += 1
        elif ch in ">])":
            depth -= 1
        if ch == "," and depth == 0:
            parts.append(current.strip())
            current = ""
            continue
        current += ch
    parts.append(current.strip())
    return [p for p in parts if p]


def _class_body(source_code: str, class_name: str = "Solution") -> str | None:
    m = re.search(rf"\bclass\s+{class_name}\b[^{{]*\{{", source_code)
    if not m:
        return None
    return source_code[m.end():]


# ─── JavaScript / TypeScript ───────────────────────────────────

# Top-level only: declarations start in column 0
JS_FUNCTION_DECL = re.compile(r"^(?:export\s+)?(?:async\s+)?function\s+(\w+)\s*\(([^)]*)\)", re.MULTILINE)
JS_FUNCTION_EXPR = re.compile(
    r"^(?:export\s+)?(?:var|let|const)\s+(\w+)\s*=\s*(?:async\s+)?"
    r"(?:function\b\s*\w*\s*\(([^)]*)\)|\(([^)]*)\)\s*(?::[^=]*)?=>)",
    re.MULTILINE,
)
JS_CLASS_METHOD = re.compile(
    r"^\s*(?:static\s+)?(?:async\s+)?(\w+)\s*\(([^)]*)\)\s*(?::[^{]*)?\{", re.MULTILINE
)

JS_DRIVER = Template(r"""
$source

// Driver code
const __fs = require('fs');
try {
    const __lines = __fs.readFileSync(0, 'utf-8').split('\n').filter((l) => l.trim());
    const __args = [];
    for (let i = 0; i < $arg_count; i++) {
        if (i < __lines.length) {
            try {
                __args.push(JSON.parse(__lines[i]));
            } catch (e) {
                __args.push(__lines[i].trim());
            }
        } else {
            __args.push(undefined);
        }
    }

    let __result;
    if (typeof $func_name === 'function') {
        __result = $func_name(...__args);
    } else if (typeof Solution !== 'undefined' && typeof (new Solution())['$func_name'] === 'function') {
        __result = (new Solution())['$func_name'](...__args);
    }

    console.log(JSON.stringify(__result));
} catch (error) {
    console.error(error);
    process.exit(1);
}
""")


def _find_js_entry(source_code: str) -> tuple[str, str] | None:
    # A Solution class wins over any top-level helper
    body = _class_body(source_code)
    if body is not None:
        for m in JS_CLASS_METHOD.finditer(body):
            name = m.group(1)
            if name != "constructor" and name not in CONTROL_KEYWORDS:
                return name, m.group(2)

    m = JS_FUNCTION_DECL.search(source_code)
    if m:
        return m.group(1), m.group(2)
    m = JS_FUNCTION_EXPR.search(source_code)
    if m:
        params = m.group(2) if m.group(2) is not None else m.group(3)
        return m.group(1), params
    return None


def _javascript_driver(source_code: str) -> str:
    entry = _find_js_entry(source_code)
    if entry is None:
        return source_code
    func_name, params = entry
    return JS_DRIVER.substitute(
        source=source_code,
        func_name=func_name,
        arg_count=len(_split_params(params)),
    )


# ─── Python ────────────────────────────────────────────────────

PY_DEF = re.compile(r"def\s+(\w+)\s*\(([^)]*)\)\s*(?:->[^:]*)?:")
PY_SOLUTION_CLASS = re.compile(r"^class\s+Solution\b[^:\n]*:[^\n]*(?:\n|$)", re.MULTILINE)

PY_DRIVER = Template(r'''
import sys
import json
from typing import Dict, List, Optional, Set, Tuple

$source


if __name__ == "__main__":
    try:
        _lines = [line for line in sys.stdin.read().split("\n") if line.strip()]
        _args = []
        for _line in _lines[:$arg_count]:
            try:
                _args.append(json.loads(_line))
            except ValueError:
                _args.append(_line.strip())
        _result = $call(*_args)
        print(json.dumps(_result, separators=(",", ":")))
    except Exception as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)
''')


def _python_class_body(source_code: str) -> str | None:
    """Indented block under ``class Solution:``, or None when there is no such class."""
    m = PY_SOLUTION_CLASS.search(source_code)
    if not m:
        return None
    block = []
    for line in source_code[m.end():].split("\n"):
        if line.strip() and not line[0].isspace():
            break
        block.append(line)
    return "\n".join(block)


def _python_driver(source_code: str) -> str:
    class_body = _python_class_body(source_code)
    has_solution = class_body is not None

    match = None
    for m in PY_DEF.finditer(class_body if has_solution else source_code):
        # helpers and dunders inside Solution are not entry points
        if has_solution and m.group(1).startswith("_"):
            continue
        match = m
        break
    if match is None:
        return source_code

    func_name = match.group(1)
    params = [
        p for p in _split_params(match.group(2))
        if p.split(":")[0].split("=")[0].strip() not in ("self", "cls", "*", "/")
    ]
    call = f"Solution().{func_name}" if has_solution else func_name
    return PY_DRIVER.substitute(source=source_code, call=call, arg_count=len(params))


# ─── Java ──────────────────────────────────────────────────────

JAVA_IMPORT = re.compile(r"^\s*import\s+(?:static\s+)?[\w.*]+\s*;\s*$", re.MULTILINE)
JAVA_PACKAGE = re.compile(r"^\s*package\s+[\w.]+\s*;\s*$", re.MULTILINE)
JAVA_METHOD = re.compile(r"\b[\w<>\[\], ]+?\s+(\w+)\s*\(([^)]*)\)\s*(?:throws\s+[\w.,\s]+)?\{")

JAVA_DRIVER = Template(r"""$imports
import java.util.*;
import java.lang.reflect.*;

public class Main {
    public static void main(String[] args) {
        Scanner sc = new Scanner(System.in);
        List<String> inputs = new ArrayList<>();
        while (sc.hasNextLine()) {
            String line = sc.nextLine();
            if (!line.trim().isEmpty()) inputs.add(line.trim());
        }

        try {
            Solution sol = new Solution();
            Method method = null;
            for (Method m : Solution.class.getDeclaredMethods()) {
                if (m.getName().equals("$method_name")) {
                    method = m;
                    break;
                }
            }
            if (method == null) throw new NoSuchMethodException("$method_name");
            method.setAccessible(true);

            Class<?>[] types = method.getParameterTypes();
            Object[] callArgs = new Object[types.length];
            for (int i = 0; i < types.length && i < inputs.size(); i++) {
                callArgs[i] = convert(inputs.get(i), types[i]);
            }
            Object result = method.invoke(sol, callArgs);
            System.out.println(toJson(result));
        } catch (InvocationTargetException e) {
            e.getCause().printStackTrace();
            System.exit(1);
        } catch (Exception e) {
            e.printStackTrace();
            System.exit(1);
        }
    }

    static String unquote(String s) {
        String t = s.trim();
        if (t.length() >= 2 && t.startsWith("\"") && t.endsWith("\"")) {
            return t.substring(1, t.length() - 1).replace("\\\"", "\"").replace("\\\\", "\\");
        }
        return t;
    }

    static String[] splitArray(String s) {
        String t = s.trim();
        if (t.startsWith("[")) t = t.substring(1);
        if (t.endsWith("]")) t = t.substring(0, t.length() - 1);
        t = t.trim();
        if (t.isEmpty()) return new String[0];
        List<String> parts = new ArrayList<>();
        StringBuilder cur = new StringBuilder();
        boolean quoted = false;
        for (int i = 0; i < t.length(); i++) {
            char c = t.charAt(i);
            if (c == '\\' && quoted && i + 1 < t.length()) {
                cur.append(c).append(t.charAt(++i));
                continue;
            }
            if (c == '"') quoted = !quoted;
            if (c == ',' && !quoted) {
                parts.add(cur.toString().trim());
                cur.setLength(0);
                continue;
            }
            cur.append(c);
        }
        parts.add(cur.toString().trim());
        return parts.toArray(new String[0]);
    }

    static Object convert(String val, Class<?> type) {
        String v = val.trim();
        if (type == int.class || type == Integer.class) return Integer.parseInt(v);
        if (type == long.class || type == Long.class) return Long.parseLong(v);
        if (type == double.class || type == Double.class) return Double.parseDouble(v);
        if (type == boolean.class || type == Boolean.class) return Boolean.parseBoolean(v);
        if (type == int[].class) {
            String[] p = splitArray(v);
            int[] out = new int[p.length];
            for (int i = 0; i < p.length; i++) out[i] = Integer.parseInt(p[i]);
            return out;
        }
        if (type == long[].class) {
            String[] p = splitArray(v);
            long[] out = new long[p.length];
            for (int i = 0; i < p.length; i++) out[i] = Long.parseLong(p[i]);
            return out;
        }
        if (type == double[].class) {
            String[] p = splitArray(v);
            double[] out = new double[p.length];
            for (int i = 0; i < p.length; i++) out[i] = Double.parseDouble(p[i]);
            return out;
        }
        if (type == String[].class) {
            String[] p = splitArray(v);
            for (int i = 0; i < p.length; i++) p[i] = unquote(p[i]);
            return p;
        }
        return unquote(v);
    }

    static String toJson(Object o) {
        if (o == null) return "null";
        if (o instanceof String || o instanceof Character) {
            String s = String.valueOf(o).replace("\\", "\\\\").replace("\"", "\\\"").replace("\n", "\\n");
            return "\"" + s + "\"";
        }
        if (o instanceof int[]) return Arrays.toString((int[]) o).replace(" ", "");
        if (o instanceof long[]) return Arrays.toString((long[]) o).replace(" ", "");
        if (o instanceof double[]) return Arrays.toString((double[]) o).replace(" ", "");
        if (o instanceof boolean[]) return Arrays.toString((boolean[]) o).replace(" ", "");
        if (o instanceof Object[]) return toJson(Arrays.asList((Object[]) o));
        if (o instanceof Collection) {
            StringBuilder sb = new StringBuilder("[");
            boolean first = true;
            for (Object item : (Collection<?>) o) {
                if (!first) sb.append(",");
                sb.append(toJson(item));
                first = false;
            }
            return sb.append("]").toString();
        }
        return String.valueOf(o);
    }
}

$source
""")


def _java_driver(source_code: str) -> str:
    body = _class_body(source_code)
    if body is None:
        return source_code

    method_name = None
    for m in JAVA_METHOD.finditer(body):
        name = m.group(1)
        if name != "Solution" and name not in CONTROL_KEYWORDS:
            method_name = name
            break
    if method_name is None:
        return source_code

    # Main must come first for the single-file launcher, so imports move above it
    imports = "\n".join(line.strip() for line in JAVA_IMPORT.findall(source_code))
    source = JAVA_PACKAGE.sub("", JAVA_IMPORT.sub("", source_code))
    source = re.sub(r"\bpublic\s+class\s+Solution\b", "class Solution", source)
    return JAVA_DRIVER.substitute(imports=imports, method_name=method_name, source=source.strip())


# ─── C++ ───────────────────────────────────────────────────────

CPP_METHOD = re.compile(
    r"(?:^|[;{}:])\s*((?:const\s+)?[A-Za-z_][\w:]*(?:\s+(?:long|int)\b)?(?:\s*<[^(){};]*>)?(?:\s*[&*])?)"
    r"\s+(\w+)\s*\(([^)]*)\)\s*(?:const\s*)?\{"
)
CPP_SCALARS = {"int", "long", "long long", "double", "bool", "string"}

CPP_DRIVER = Template(r"""#include <iostream>
#include <string>
#include <vector>
#include <algorithm>
#include <sstream>
#include <map>
#include <set>
#include <unordered_map>
#include <unordered_set>
#include <queue>
#include <stack>
#include <climits>
#include <cmath>
#include <numeric>
using namespace std;

$source

static string driver_trim(const string& s) {
    size_t b = s.find_first_not_of(" \t\r\n");
    if (b == string::npos) return "";
    size_t e = s.find_last_not_of(" \t\r\n");
    return s.substr(b, e - b + 1);
}

static void driver_parse(const string& s, int& out) { out = stoi(driver_trim(s)); }
static void driver_parse(const string& s, long& out) { out = stol(driver_trim(s)); }
static void driver_parse(const string& s, long long& out) { out = stoll(driver_trim(s)); }
static void driver_parse(const string& s, double& out) { out = stod(driver_trim(s)); }
static void driver_parse(const string& s, bool& out) { out = driver_trim(s) == "true"; }
static void driver_parse(const string& s, string& out) {
    string t = driver_trim(s);
    if (t.size() >= 2 && t.front() == '"' && t.back() == '"') t = t.substr(1, t.size() - 2);
    out = t;
}

template <typename T>
static void driver_parse(const string& s, vector<T>& out) {
    out.clear();
    string t = driver_trim(s);
    if (t.size() < 2) return;
    t = t.substr(1, t.size() - 2);
    int depth = 0;
    bool quoted = false;
    string cur;
    for (char c : t) {
        if (c == '"') quoted = !quoted;
        if (!quoted && c == '[') depth++;
        if (!quoted && c == ']') depth--;
        if (!quoted && depth == 0 && c == ',') {
            T v;
            driver_parse(cur, v);
            out.push_back(v);
            cur.clear();
            continue;
        }
        cur += c;
    }
    if (!driver_trim(cur).empty()) {
        T v;
        driver_parse(cur, v);
        out.push_back(v);
    }
}

static void driver_print(int v) { cout << v; }
static void driver_print(long v) { cout << v; }
static void driver_print(long long v) { cout << v; }
static void driver_print(double v) { cout << v; }
static void driver_print(bool v) { cout << (v ? "true" : "false"); }
static void driver_print(const string& v) { cout << '"' << v << '"'; }

template <typename T>
static void driver_print(const vector<T>& v) {
    cout << '[';
    for (size_t i = 0; i < v.size(); i++) {
        if (i) cout << ',';
        driver_print(v[i]);
    }
    cout << ']';
}

int main() {
    vector<string> lines;
    string line;
    while (getline(cin, line)) {
        if (driver_trim(line).empty()) continue;
        lines.push_back(line);
    }

    try {
$declarations
        Solution sol;
        auto result = sol.$method_name($call_args);
        driver_print(result);
        cout << endl;
    } catch (const exception& e) {
        cerr << e.what() << endl;
        return 1;
    }
    return 0;
}
""")


def _normalise_cpp_type(raw: str) -> str:
    t = re.sub(r"\bconst\b|\bstd::|[&*]", "", raw)
    t = re.sub(r"\s+", " ", t).strip()
    return re.sub(r"\s*([<>,])\s*", r"\1", t)


def _cpp_type_supported(t: str) -> bool:
    if t in CPP_SCALARS:
        return True
    m = re.fullmatch(r"vector<(.+)>", t)
    return bool(m) and _cpp_type_supported(m.group(1))


def _cpp_driver(source_code: str) -> str:
    body = _class_body(source_code)
    if body is None:
        return source_code

    for m in CPP_METHOD.finditer(body):
        return_type, method_name, params = m.groups()
        if method_name in CONTROL_KEYWORDS or method_name == "Solution":
            continue
        break
    else:
        return source_code

    if not _cpp_type_supported(_normalise_cpp_type(return_type)):
        return source_code

    arg_types = []
    for param in _split_params(params):
        pm = re.match(r"^(.*?)(\w+)\s*$", param)
        arg_type = _normalise_cpp_type(pm.group(1)) if pm else ""
        if not _cpp_type_supported(arg_type):
            return source_code
        arg_types.append(arg_type.replace(">>", "> >"))

    declarations = "\n".join(
        f"        {arg_type} arg{i}{{}};\n"
        f"        if (lines.size() > {i}) driver_parse(lines[{i}], arg{i});"
        for i, arg_type in enumerate(arg_types)
    )
    return CPP_DRIVER.substitute(
        source=source_code,
        declarations=declarations,
        method_name=method_name,
        call_args=", ".join(f"arg{i}" for i in range(len(arg_types))),
    )


# ─── Entry point ───────────────────────────────────────────────

def get_driver_code(title: str, language: str, source_code: str) -> str:
    """Wrap ``source_code`` in a stdin/stdout driver for ``language``.

    ``title`` identifies the problem the code belongs to; languages without a
    driver, and code without a recognisable entry point, come back unchanged.
    """
    lang = (language or "").lower()

    if lang in ("javascript", "typescript"):
        return _javascript_driver(source_code)
    if lang in ("python", "python3"):
        return _python_driver(source_code)
    if lang == "java":
        return _java_driver(source_code)
    if lang in ("cpp", "c++"):
        return _cpp_driver(source_code)
    return source_code
