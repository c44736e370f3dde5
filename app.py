import pandas as pd
import streamlit as st

from src.catalog import BRANCH_SEMESTERS, semesters_for_branch
from src.grading import compute_result
from src.record_store import RecordStore
from src.records import (
    add_subject,
    clear_all,
    delete_student,
    find_student,
    remove_subject,
    replace_subjects,
    save_student,
)
from src.validation import ValidationError, validate_student_form
from src.views import filter_students, student_detail, students_table, summary_stats

# ------------------------
# Streamlit UI
# ------------------------

st.set_page_config(
    page_title="Student Result Management System",
    page_icon="🎓",
    layout="wide",
)

st.title("🎓 Student Result Management System")
st.write(
    "Keep per-semester subject lists for each branch, enter student marks, and "
    "get total, CGPA, grade and pass/fail worked out for you."
)

# One store per browser session; it owns the document and is passed around.
if "store" not in st.session_state:
    store = RecordStore.from_config()
    store.load()
    st.session_state["store"] = store
store: RecordStore = st.session_state["store"]

if "flash" in st.session_state:
    st.toast(st.session_state.pop("flash"))

BRANCH_OPTIONS = list(BRANCH_SEMESTERS.keys())


def semester_options(branch: str):
    return [str(i) for i in range(1, semesters_for_branch(branch) + 1)]


def show_errors(err: ValidationError):
    for field, message in err.errors.items():
        st.error(f"{field}: {message}")


# ------------------------
# Filters and summary
# ------------------------

f1, f2, f3 = st.columns([1, 1, 2])
with f1:
    filter_branch = st.selectbox("Branch", ["All"] + BRANCH_OPTIONS, key="filter_branch")
    filter_branch = "" if filter_branch == "All" else filter_branch
with f2:
    filter_semester = st.selectbox(
        "Semester",
        ["All"] + semester_options(filter_branch),
        key="filter_semester",
        disabled=not filter_branch,
    )
    filter_semester = "" if filter_semester == "All" else filter_semester
with f3:
    search = st.text_input("Search by name or roll number", key="search")

visible = filter_students(store.document.students, filter_branch, filter_semester, search)
stats = summary_stats(visible)

m1, m2, m3 = st.columns(3)
with m1:
    st.metric("Students", stats["students"])
with m2:
    st.metric("Average CGPA", f"{stats['average_cgpa']:.2f}")
with m3:
    st.metric("Pass rate", f"{stats['pass_rate']}%")

table = students_table(visible)
if table.empty:
    st.info("No records")
else:
    st.dataframe(
        table.drop(columns=["Id"]),
        use_container_width=True,
        hide_index=True,
        column_config={"CGPA": st.column_config.NumberColumn("CGPA", format="%.2f")},
    )

# ------------------------
# Add / edit a student result
# ------------------------

st.markdown("---")
st.subheader("Add or edit a student result")

labels = {s.id: f"{s.roll_no} · {s.name}" for s in filter_students(store.document.students)}
choice = st.selectbox(
    "Record",
    ["new"] + list(labels.keys()),
    format_func=lambda k: "➕ New student" if k == "new" else labels[k],
    key="editing_choice",
)
editing = find_student(store, choice) if choice != "new" else None

c1, c2 = st.columns(2)
with c1:
    name = st.text_input("Student name", value=editing.name if editing else "", key=f"name_{choice}")
    branch = st.selectbox(
        "Branch",
        BRANCH_OPTIONS,
        index=BRANCH_OPTIONS.index(editing.branch) if editing and editing.branch in BRANCH_OPTIONS else 0,
        key=f"branch_{choice}",
    )
with c2:
    roll_no = st.text_input("Roll number", value=editing.roll_no if editing else "", key=f"roll_{choice}")
    sems = semester_options(branch)
    semester = st.selectbox(
        "Semester",
        sems,
        index=sems.index(editing.semester) if editing and editing.semester in sems else 0,
        key=f"semester_{choice}_{branch}",
    )

subjects = store.subjects_for(branch, semester)
if len(subjects) < 3:
    st.warning("Tip: Add at least 3 subjects for this semester")

marks = []
for idx, subject in enumerate(subjects):
    default = 0.0
    if editing and idx < len(editing.marks):
        default = float(editing.marks[idx])
    marks.append(
        st.number_input(
            f"{subject} (max 100)",
            min_value=0.0,
            max_value=100.0,
            step=1.0,
            value=default,
            key=f"mark_{choice}_{branch}_{semester}_{idx}",
        )
    )

preview = compute_result(marks)
p1, p2, p3, p4 = st.columns(4)
with p1:
    st.metric("Total", f"{preview['totalObtained']} / {preview['totalMax']}")
with p2:
    st.metric("CGPA", f"{preview['cgpa']:.2f}")
with p3:
    st.metric("Grade", preview["grade"])
with p4:
    st.metric("Status", preview["status"])

b1, b2 = st.columns([1, 5])
with b1:
    if st.button("Save result", type="primary"):
        try:
            form = validate_student_form(name, roll_no, branch, semester, marks)
            _, created = save_student(store, form, editing_id=editing.id if editing else None)
        except ValidationError as e:
            show_errors(e)
        else:
            st.session_state["flash"] = "Student added" if created else "Student updated"
            st.rerun()
with b2:
    if editing:
        sure = st.checkbox("Delete this record?", key=f"confirm_delete_{choice}")
        if st.button("Delete this record", disabled=not sure, key=f"delete_{choice}"):
            delete_student(store, editing.id)
            st.session_state["flash"] = "Deleted"
            st.session_state.pop("editing_choice", None)
            st.rerun()

# ------------------------
# Result detail
# ------------------------

if editing:
    st.markdown("---")
    st.subheader(f"Result detail: {editing.name} ({editing.roll_no})")
    detail_subjects = store.subjects_for(editing.branch, editing.semester)
    detail = student_detail(editing, detail_subjects)
    detail["Pass"] = detail["Pass"].map({True: "✔", False: "✖"})
    st.dataframe(detail, use_container_width=True, hide_index=True)

    res = compute_result(editing.marks)
    st.write(
        f"**Total:** {res['totalObtained']} · **CGPA:** {res['cgpa']:.2f} · "
        f"**Grade:** {res['grade']} · **Status:** {res['status']}"
    )

# ------------------------
# Manage subjects
# ------------------------

st.markdown("---")
st.subheader("Manage subjects")

s1, s2 = st.columns(2)
with s1:
    subj_branch = st.selectbox("Branch", BRANCH_OPTIONS, key="subjects_branch")
with s2:
    subj_semester = st.selectbox("Semester", semester_options(subj_branch), key=f"subjects_semester_{subj_branch}")

current = store.subjects_for(subj_branch, subj_semester)

with st.form(f"subjects_form_{subj_branch}_{subj_semester}"):
    st.markdown("Edit the names below; keep between 3 and 10 subjects.")
    edited = st.data_editor(
        pd.DataFrame({"Subject": list(current)}),
        num_rows="dynamic",
        use_container_width=True,
        key=f"subjects_editor_{subj_branch}_{subj_semester}",
    )
    if st.form_submit_button("Save subjects", type="primary"):
        try:
            replace_subjects(store, subj_branch, subj_semester, edited["Subject"].dropna().tolist())
        except ValidationError as e:
            show_errors(e)
        else:
            st.success("Subjects saved")

a1, a2, a3 = st.columns([3, 1, 1])
with a1:
    new_subject = st.text_input("New subject name", key=f"new_subject_{subj_branch}_{subj_semester}")
with a2:
    if st.button("Add subject"):
        try:
            add_subject(store, subj_branch, subj_semester, new_subject)
        except ValidationError as e:
            show_errors(e)
        else:
            st.rerun()
with a3:
    if current and st.button("Remove last"):
        remove_subject(store, subj_branch, subj_semester, len(current) - 1)
        st.rerun()

# ------------------------
# Danger zone
# ------------------------

st.markdown("---")
with st.expander("Clear all data"):
    st.write("This will remove all students and custom subjects.")
    confirm = st.checkbox("Yes, remove everything")
    if st.button("Clear all", disabled=not confirm):
        clear_all(store)
        st.session_state["flash"] = "All data cleared"
        st.rerun()


# streamlit run app.py
