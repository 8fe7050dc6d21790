import os
from tkinter import filedialog, messagebox
from tkinter.scrolledtext import ScrolledText
import ttkbootstrap as ttk
from ttkbootstrap.constants import *

from dna_codec import DNA_SUFFIX, do_file_decode, do_file_encode
from envelope import decode_string, encode_string
from framing import framing_from_env
from nucleotides import DEFAULT_TABLE, keyed_table


def table_for(password):
    return keyed_table(password) if password else DEFAULT_TABLE


def build_app():
    framing = framing_from_env()

    app = ttk.Window(themename="cyborg")
    app.title("🧬 DNA Codec")
    app.geometry("800x700")

    ttk.Label(app, text=f"DNA Codec v{framing.version}", font=("Segoe UI", 18, "bold"), bootstyle=INFO).pack(pady=10)

    # Message input
    ttk.Label(app, text="Message:", font=("Segoe UI", 12, "bold")).pack(anchor="w", padx=20)
    msg_entry = ScrolledText(app, width=80, height=4, font=("Consolas", 11))
    msg_entry.pack(padx=20, pady=6)

    # Password
    pwd_frame = ttk.Frame(app)
    pwd_frame.pack(fill="x", padx=20, pady=10)
    ttk.Label(pwd_frame, text="🔐 Password (optional):", font=("Segoe UI", 11)).pack(side="left")
    pwd_entry = ttk.Entry(pwd_frame, show="*", width=30)
    pwd_entry.pack(side="left", padx=10)

    # DNA sequence
    ttk.Label(app, text="DNA Sequence:", font=("Segoe UI", 12, "bold")).pack(anchor="w", padx=20)
    dna_box = ScrolledText(app, width=80, height=6, font=("Consolas", 11), fg="cyan", bg="black")
    dna_box.pack(padx=20, pady=6)

    # Decoded output
    ttk.Label(app, text="Decoded Message:", font=("Segoe UI", 12, "bold")).pack(anchor="w", padx=20)
    decoded_box = ScrolledText(app, width=80, height=4, font=("Consolas", 11), fg="lime", bg="black")
    decoded_box.pack(padx=20, pady=6)

    def do_encode():
        try:
            msg = msg_entry.get("1.0", "end-1c")
            seq = encode_string(msg.encode("utf-8"), framing, table_for(pwd_entry.get()))
            dna_box.delete("1.0", "end")
            dna_box.insert("1.0", seq)
        except Exception as e:
            messagebox.showerror("Error", str(e))

    def do_decode():
        try:
            seq = dna_box.get("1.0", "end-1c").strip()
            data = decode_string(seq, framing, table_for(pwd_entry.get()))
            decoded_box.delete("1.0", "end")
            decoded_box.insert("1.0", data.decode("utf-8", errors="replace"))
        except Exception as e:
            messagebox.showerror("Error", str(e))

    def do_encode_file():
        path = filedialog.askopenfilename(title="Select File to Encode")
        if not path:
            return
        try:
            out = do_file_encode(path, framing, table_for(pwd_entry.get()))
            messagebox.showinfo("Success", f"Encoded to {os.path.basename(out)}")
        except Exception as e:
            messagebox.showerror("Error", str(e))

    def do_decode_file():
        path = filedialog.askopenfilename(
            title="Select DNA File",
            filetypes=[("DNA Files", f"*{DNA_SUFFIX}"), ("All Files", "*.*")]
        )
        if not path:
            return
        out_dir = filedialog.askdirectory(title="Save Decoded File In")
        if not out_dir:
            return
        try:
            out = do_file_decode(path, framing, table_for(pwd_entry.get()), out_dir)
            messagebox.showinfo("Success", f"Decoded to {out}")
        except Exception as e:
            messagebox.showerror("Error", str(e))

    # Buttons row
    btn_frame = ttk.Frame(app)
    btn_frame.pack(pady=20)

    ttk.Button(btn_frame, text="🧬 Encode Message", command=do_encode, bootstyle=SUCCESS).grid(row=0, column=0, padx=10)
    ttk.Button(btn_frame, text="🔎 Decode Sequence", command=do_decode, bootstyle=WARNING).grid(row=0, column=1, padx=10)
    ttk.Button(btn_frame, text="📂 Encode File", command=do_encode_file, bootstyle=PRIMARY).grid(row=0, column=2, padx=10)
    ttk.Button(btn_frame, text="💾 Decode .dna File", command=do_decode_file, bootstyle=SECONDARY).grid(row=0, column=3, padx=10)

    return app


if __name__ == "__main__":
    build_app().mainloop()
